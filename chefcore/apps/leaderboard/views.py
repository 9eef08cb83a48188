from __future__ import annotations

import logging
from typing import Any, Dict, List, Tuple

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import render

from chefcore.apps.scoring import selectors
from chefcore.apps.scoring.exceptions import DataAccessError, InvalidSortKey
from chefcore.apps.scoring.records import ChefRow, EpisodeRecord
from chefcore.apps.scoring.rules import SCORING_RULES
from chefcore.apps.scoring.services.matrix import build, order_rows, parse_sort_key, sort_episodes
from chefcore.apps.scoring.services.standings import compute_standings, team_color

logger = logging.getLogger(__name__)


# ---------- Utilidades ----------

def _load_matrix() -> Tuple[List[EpisodeRecord], List[ChefRow]]:
    episodes = sort_episodes(selectors.list_episodes())
    rows = build(selectors.list_chefs(), episodes, selectors.list_score_events())
    return episodes, rows


def _resolve_sort(request: HttpRequest, rows: List[ChefRow]) -> Tuple[str, List[ChefRow]]:
    """
    Aplica ?sort=... ; si la clave es inválida (o la columna no existe)
    vuelve al orden por defecto.
    """
    default = getattr(settings, "LEAGUE_DEFAULT_SORT", "total")
    requested = request.GET.get("sort") or default
    try:
        return requested, order_rows(rows, requested)
    except InvalidSortKey:
        logger.info("Orden inválido %r, se usa %r", requested, default)
        return default, order_rows(rows, default)


def _unavailable(request: HttpRequest, template: str, ctx: Dict[str, Any]) -> HttpResponse:
    ctx["load_error"] = "Scores are temporarily unavailable. Please try again in a moment."
    return render(request, template, ctx, status=503)


# ---------- Vistas ----------

def standings(request: HttpRequest) -> HttpResponse:
    """
    Home: tabla de equipos.
      • total de equipo = suma de totales de sus chefs
      • el líder queda destacado (rank 1)
    """
    try:
        _, rows = _load_matrix()
        teams = selectors.list_teams()
    except DataAccessError:
        return _unavailable(request, "leaderboard/standings.html", {"standings": []})

    table = [
        {"standing": s, "color": team_color(s.team.id), "is_leader": s.rank == 1}
        for s in compute_standings(teams, rows)
    ]
    return render(request, "leaderboard/standings.html", {"standings": table})


def chef_scores(request: HttpRequest) -> HttpResponse:
    """Matriz chef × episodio con encabezados ordenables."""
    try:
        episodes, rows = _load_matrix()
    except DataAccessError:
        return _unavailable(request, "leaderboard/chef_scores.html", {"episodes": [], "rows": []})

    sort, rows = _resolve_sort(request, rows)
    kind, index = parse_sort_key(sort)

    columns = [
        {
            "episode": ep,
            "sort_key": f"episode-{pos}",
            "is_sorted": kind == "episode" and index == pos - 1,
        }
        for pos, ep in enumerate(episodes, start=1)
    ]
    ctx = {
        "columns": columns,
        "rows": rows,
        "sort": sort,
        "sort_kind": kind,
        "rules": SCORING_RULES,
    }
    return render(request, "leaderboard/chef_scores.html", ctx)


def chef_scores_json(request: HttpRequest) -> JsonResponse:
    try:
        episodes, rows = _load_matrix()
    except DataAccessError:
        return JsonResponse({"ok": False, "error": "unavailable"}, status=503)

    sort, rows = _resolve_sort(request, rows)
    payload = {
        "ok": True,
        "sort": sort,
        "episodes": [
            {
                "id": ep.id,
                "number": ep.number,
                "title": ep.title,
                "air_date": ep.air_date.isoformat() if ep.air_date else None,
                "is_finale": ep.is_finale,
            }
            for ep in episodes
        ],
        "chefs": [
            {
                "id": row.chef.id,
                "name": row.chef.name,
                "status": row.chef.status.value,
                "total": row.total,
                "cells": [
                    {"score": cell.score, "flags": list(cell.flags)} if cell.is_present else None
                    for cell in row.cells
                ],
            }
            for row in rows
        ],
    }
    return JsonResponse(payload)


def rules(request: HttpRequest) -> HttpResponse:
    return render(
        request,
        "leaderboard/rules.html",
        {"rules": SCORING_RULES, "roster_max": settings.LEAGUE_ROSTER_MAX_CHEFS},
    )


# -------- Healthcheck simple --------
def health(request: HttpRequest) -> JsonResponse:
    return JsonResponse({"ok": True})
