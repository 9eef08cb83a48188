from django.test import SimpleTestCase

from chefcore.apps.scoring.records import ABSENT, Cell, ChefStatus, ScoreEventRecord
from chefcore.apps.scoring.rules import RULES_BY_FLAG, SCORING_RULES, points_label


class ChefStatusTest(SimpleTestCase):
    def test_explicit_status_wins(self):
        self.assertEqual(ChefStatus.normalize("lck", eliminated=True), ChefStatus.LCK)
        self.assertEqual(ChefStatus.normalize("active", eliminated=True), ChefStatus.ACTIVE)
        self.assertEqual(ChefStatus.normalize(" Eliminated "), ChefStatus.ELIMINATED)

    def test_aliases(self):
        self.assertEqual(ChefStatus.normalize("last-chance-kitchen"), ChefStatus.LCK)
        self.assertEqual(ChefStatus.normalize("last_chance_kitchen"), ChefStatus.LCK)

    def test_legacy_boolean_fallback(self):
        self.assertEqual(ChefStatus.normalize("", eliminated=True), ChefStatus.ELIMINATED)
        self.assertEqual(ChefStatus.normalize(None, eliminated=False), ChefStatus.ACTIVE)
        # Valor desconocido -> se usa el booleano
        self.assertEqual(ChefStatus.normalize("retired", eliminated=True), ChefStatus.ELIMINATED)
        self.assertEqual(ChefStatus.normalize("retired"), ChefStatus.ACTIVE)

    def test_rank_and_label(self):
        ordered = sorted(ChefStatus, key=lambda s: s.rank)
        self.assertEqual(ordered, [ChefStatus.ACTIVE, ChefStatus.LCK, ChefStatus.ELIMINATED])
        self.assertEqual(ChefStatus.LCK.label, "LCK")


class CellTest(SimpleTestCase):
    def test_absent_cell(self):
        self.assertIs(Cell.from_event(None), ABSENT)
        self.assertFalse(ABSENT.is_present)
        self.assertEqual(ABSENT.flags, ())

    def test_from_event_copies_flags(self):
        cell = Cell.from_event(
            ScoreEventRecord(chef_id=1, episode_id=1, score=-2, elimination_bottom=True, quickfire_top=True)
        )
        self.assertTrue(cell.is_present)
        self.assertEqual(cell.score, -2)
        self.assertEqual(cell.flags, ("quickfire_top", "elimination_bottom"))


class RulesTest(SimpleTestCase):
    def test_published_points(self):
        points = {rule.flag: rule.points for rule in SCORING_RULES}
        self.assertEqual(
            points,
            {
                "quickfire_winner": 3,
                "quickfire_top": 1,
                "quickfire_bottom": -1,
                "elimination_winner": 5,
                "elimination_top": 2,
                "elimination_bottom": -2,
                "lck_winner": 1,
            },
        )
        self.assertEqual(RULES_BY_FLAG["elimination_winner"].points, 5)

    def test_points_label(self):
        self.assertEqual(points_label(3), "+3")
        self.assertEqual(points_label(-2), "-2")
