import tempfile
from io import StringIO
from pathlib import Path

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase, override_settings
from openpyxl import Workbook

from chefcore.apps.league.models import Chef, ChefScore, Episode, Team, TeamChef
from chefcore.apps.scoring import selectors
from chefcore.apps.scoring.records import ChefStatus


class SeedDemoLeagueTest(TestCase):
    def test_seed_is_idempotent(self):
        out = StringIO()
        call_command("seed_demo_league", "--episodes", "3", stdout=out)
        call_command("seed_demo_league", "--episodes", "3", stdout=out)

        self.assertEqual(Team.objects.count(), 4)
        self.assertEqual(Chef.objects.count(), 12)
        self.assertEqual(Episode.objects.count(), 3)
        self.assertTrue(Episode.objects.get(episode_number=3).is_finale)
        self.assertLessEqual(ChefScore.objects.count(), 12 * 3)
        self.assertIn("Demo lista", out.getvalue())

    def test_seed_sets_mixed_statuses(self):
        call_command("seed_demo_league", stdout=StringIO())
        statuses = {c.status for c in selectors.list_chefs()}
        self.assertEqual(statuses, {ChefStatus.ACTIVE, ChefStatus.LCK, ChefStatus.ELIMINATED})
        # Fila legacy: sin status pero eliminada por booleano
        legacy = Chef.objects.get(status="", eliminated=True)
        self.assertEqual(legacy.normalized_status, "eliminated")

    def test_create_staff(self):
        call_command("seed_demo_league", "--episodes", "0", "--create-staff", stdout=StringIO())
        user = get_user_model().objects.get(username="commissioner")
        self.assertTrue(user.is_staff)
        self.assertTrue(user.check_password("Pass1234!"))

    def test_reseed_with_more_episodes_keeps_a_single_finale(self):
        call_command("seed_demo_league", "--episodes", "3", stdout=StringIO())
        call_command("seed_demo_league", "--episodes", "5", stdout=StringIO())
        finales = list(Episode.objects.filter(is_finale=True).values_list("episode_number", flat=True))
        self.assertEqual(finales, [5])

        call_command("seed_demo_league", "--episodes", "4", stdout=StringIO())
        finales = list(Episode.objects.filter(is_finale=True).values_list("episode_number", flat=True))
        self.assertEqual(finales, [4])

    def test_negative_episodes(self):
        with self.assertRaises(CommandError):
            call_command("seed_demo_league", "--episodes", "-1", stdout=StringIO())


class ImportTeamsXlsxTest(TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.tmpdir = Path(self.tmp.name)
        Chef.objects.create(name="Chef Carlos")

    def _workbook(self, rows, header=("team_name", "owner", "chef_1", "chef_2", "chef_3", "chef_4")):
        wb = Workbook()
        ws = wb.active
        ws.append(list(header))
        for r in rows:
            ws.append(list(r))
        path = self.tmpdir / "teams.xlsx"
        wb.save(path)
        return path

    def _run(self, path, *args):
        out = StringIO()
        call_command("import_teams_xlsx", str(path), "--report-dir", str(self.tmpdir), *args, stdout=out)
        return out.getvalue()

    def test_import_creates_teams_and_rosters(self):
        path = self._workbook([
            ("Flavor Favorites", "Alex", "chef carlos", "Chef Maria", None, None),
            ("Sous Savants", "Jordan", "Chef Lucia", None, None, None),
        ])
        out = self._run(path, "--create-chefs")

        team = Team.objects.get(name="Flavor Favorites")
        self.assertEqual(team.owner, "Alex")
        self.assertEqual(
            sorted(TeamChef.objects.filter(team=team).values_list("chef__name", flat=True)),
            ["Chef Carlos", "Chef Maria"],
        )
        # El match de chefs existentes es case-insensitive
        self.assertEqual(Chef.objects.filter(name__iexact="chef carlos").count(), 1)
        self.assertIn("OK: 2", out)
        self.assertEqual(len(list(self.tmpdir.glob("roster_import_*.csv"))), 1)

    def test_unknown_chef_without_create_is_row_error(self):
        path = self._workbook([("Kitchen Killers", "Taylor", "Chef Nobody", None, None, None)])
        out = self._run(path)
        self.assertIn("ERRORES: 1", out)
        self.assertFalse(TeamChef.objects.exists())

        report = next(self.tmpdir.glob("roster_import_*.csv")).read_text(encoding="utf-8")
        self.assertIn("ERROR", report)
        self.assertIn("Chef Nobody", report)

    @override_settings(LEAGUE_ROSTER_MAX_CHEFS=3)
    def test_roster_limit_is_respected(self):
        path = self._workbook([("Culinary Champions", "Morgan", "A", "B", "C", "D")])
        out = self._run(path, "--create-chefs")
        self.assertEqual(Team.objects.get(name="Culinary Champions").roster_size(), 3)
        self.assertIn("WARNINGS: 1", out)

    def test_dry_run_writes_nothing(self):
        path = self._workbook([("Flavor Favorites", "Alex", "Chef Carlos", None, None, None)])
        out = self._run(path, "--dry-run")
        self.assertFalse(Team.objects.exists())
        self.assertIn("Dry-run", out)
        self.assertEqual(list(self.tmpdir.glob("roster_import_*.csv")), [])

    def test_bad_header(self):
        path = self._workbook([("x", "y")], header=("team", "owner", "chef_1"))
        with self.assertRaises(CommandError):
            self._run(path)

    def test_missing_file(self):
        with self.assertRaises(CommandError):
            self._run(self.tmpdir / "missing.xlsx")

    def test_exact_name_wins_over_case_variants(self):
        Chef.objects.create(name="Amy")
        Chef.objects.create(name="AMY")
        path = self._workbook([("Alpha", "Alex", "AMY", None, None, None)])
        out = self._run(path)
        self.assertIn("OK: 1", out)
        team = Team.objects.get(name="Alpha")
        self.assertEqual(list(TeamChef.objects.filter(team=team).values_list("chef__name", flat=True)), ["AMY"])

    def test_ambiguous_case_variants_are_a_row_error(self):
        Chef.objects.create(name="Amy")
        Chef.objects.create(name="AMY")
        path = self._workbook([
            ("Alpha", "Alex", "amy", None, None, None),
            ("Beta", "Jordan", "Chef Carlos", None, None, None),
        ])
        out = self._run(path)
        # La fila ambigua falla sola; la siguiente se importa igual
        self.assertIn("OK: 1", out)
        self.assertIn("ERRORES: 1", out)
        self.assertFalse(Team.objects.filter(name="Alpha").exists())
        self.assertTrue(Team.objects.filter(name="Beta").exists())

        report = next(self.tmpdir.glob("roster_import_*.csv")).read_text(encoding="utf-8")
        self.assertIn("ambiguo", report)
