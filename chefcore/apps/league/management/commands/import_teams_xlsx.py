from __future__ import annotations

import csv
from datetime import datetime
from pathlib import Path
from typing import List

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from openpyxl import load_workbook

from chefcore.apps.league.models import Chef, Team, TeamChef


# ======================
# Utilidades
# ======================

def _clean(value) -> str:
    return str(value).strip() if value is not None else ""


def _find_chef(name: str, create: bool) -> Chef:
    # Match exacto primero; si no, case-insensitive (solo si es único)
    exact = Chef.objects.filter(name=name).first()
    if exact is not None:
        return exact
    matches = list(Chef.objects.filter(name__iexact=name)[:2])
    if len(matches) > 1:
        raise CommandError(f"Chef '{name}' es ambiguo: hay varios que difieren solo en mayúsculas.")
    if matches:
        return matches[0]
    if not create:
        raise CommandError(f"Chef '{name}' no existe (use --create-chefs).")
    return Chef.objects.create(name=name)


# ======================
# Importador
# ======================

REQUIRED_COLUMNS = ["team_name", "owner"]
CHEF_PREFIX = "chef_"


class Command(BaseCommand):
    help = (
        "Importa equipos y rosters desde un .xlsx. Cabecera: team_name | owner | chef_1 | chef_2 | ... "
        "Genera un reporte CSV por fila."
    )

    def add_arguments(self, parser):
        parser.add_argument("xlsx_path", type=str, help="Ruta al archivo .xlsx con los equipos")
        parser.add_argument("--sheet", type=str, default=None, help="Nombre de la hoja (por defecto: primera)")
        parser.add_argument("--create-chefs", action="store_true", help="Crea los chefs que no existan")
        parser.add_argument("--dry-run", action="store_true", help="Simula sin escribir cambios")
        parser.add_argument("--report-dir", type=str, default=None, help="Carpeta del reporte CSV (por defecto: cwd)")

    def handle(self, *args, **options):
        xlsx_path = Path(options["xlsx_path"])
        sheet_name = options.get("sheet")
        create_chefs = options.get("create_chefs", False)
        dry_run = options.get("dry_run", False)
        limit = int(getattr(settings, "LEAGUE_ROSTER_MAX_CHEFS", 3))

        if not xlsx_path.exists():
            raise CommandError(f"Archivo no encontrado: {xlsx_path}")

        wb = load_workbook(filename=str(xlsx_path), data_only=True, read_only=True)
        ws = wb[sheet_name] if sheet_name else wb.worksheets[0]

        # Validar cabecera
        header_cells = next(ws.iter_rows(min_row=1, max_row=1, values_only=True), ())
        headers = [_clean(h) for h in header_cells]
        for i, col in enumerate(REQUIRED_COLUMNS):
            if i >= len(headers) or headers[i] != col:
                raise CommandError(
                    f"Cabecera inválida en columna {i+1}. Esperado '{col}', encontrado '{headers[i] if i < len(headers) else ''}'.\n"
                    f"Cabecera completa: {headers}"
                )
        chef_columns = [h for h in headers if h.startswith(CHEF_PREFIX)]
        if not chef_columns:
            raise CommandError("La cabecera no tiene columnas chef_1, chef_2, ...")

        # Preparar reporte
        report_fp = None
        writer = None
        report_path = None
        if not dry_run:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            report_dir = Path(options["report_dir"]) if options.get("report_dir") else Path.cwd()
            report_path = report_dir / f"roster_import_{timestamp}.csv"
            report_fp = report_path.open("w", newline="", encoding="utf-8")
            writer = csv.writer(report_fp)
            writer.writerow(["row", "status", "team_name", "chefs_added", "warnings", "errors"])

        total = ok = errs = warns = 0

        try:
            for idx, row in enumerate(ws.iter_rows(min_row=2, values_only=True), start=2):
                data = dict(zip(headers, (_clean(v) for v in row)))
                if not any(data.values()):
                    continue
                total += 1

                status = "OK"
                chefs_added = 0
                warnings_list: List[str] = []
                errors_list: List[str] = []

                try:
                    team_name = data.get("team_name", "")
                    if not team_name:
                        raise CommandError("team_name vacío.")
                    chef_names = [data[c] for c in chef_columns if data.get(c)]
                    if len(chef_names) > limit:
                        warnings_list.append(f"Más de {limit} chefs; se ignoran los sobrantes.")
                        chef_names = chef_names[:limit]

                    if not dry_run:
                        with transaction.atomic():
                            team, created = Team.objects.get_or_create(
                                name=team_name, defaults={"owner": data.get("owner", "")}
                            )
                            if not created and data.get("owner") and team.owner != data["owner"]:
                                team.owner = data["owner"]
                                team.save(update_fields=["owner"])

                            remaining = max(0, limit - team.roster_size())
                            for name in chef_names:
                                chef = _find_chef(name, create_chefs)
                                if TeamChef.objects.filter(team=team, chef=chef).exists():
                                    continue
                                if remaining <= 0:
                                    warnings_list.append("Roster lleno; chefs adicionales ignorados.")
                                    break
                                TeamChef.objects.create(team=team, chef=chef)
                                remaining -= 1
                                chefs_added += 1
                    else:
                        chefs_added = len(chef_names)

                except CommandError as e:
                    status = "ERROR"
                    errors_list.append(str(e))
                    errs += 1
                else:
                    ok += 1
                    warns += len(warnings_list)

                if writer:
                    writer.writerow([
                        idx,
                        status,
                        data.get("team_name", ""),
                        chefs_added,
                        "; ".join(warnings_list),
                        "; ".join(errors_list),
                    ])
        finally:
            if report_fp:
                report_fp.close()
            wb.close()

        self.stdout.write(self.style.SUCCESS(f"Filas procesadas: {total}"))
        self.stdout.write(self.style.SUCCESS(f"OK: {ok}  ·  ERRORES: {errs}  ·  WARNINGS: {warns}"))
        if report_path:
            self.stdout.write(self.style.SUCCESS(f"Reporte: {report_path}"))
        else:
            self.stdout.write(self.style.WARNING("Dry-run: no se escribieron cambios."))
