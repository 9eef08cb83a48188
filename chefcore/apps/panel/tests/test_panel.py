from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.test import TestCase, override_settings
from django.urls import reverse

from chefcore.apps.league.models import Chef, ChefScore, Episode, Team, TeamChef
from chefcore.apps.panel import services
from chefcore.apps.scoring.exceptions import RosterFull

User = get_user_model()


class AccessTest(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.fan = User.objects.create_user(username="fan", password="Pass1234!")
        cls.member = User.objects.create_user(username="member", password="Pass1234!")
        group, _ = Group.objects.get_or_create(name="commissioners")
        cls.member.groups.add(group)

    def test_anonymous_is_sent_to_login(self):
        r = self.client.get(reverse("panel_dashboard"))
        self.assertEqual(r.status_code, 302)
        self.assertIn(reverse("login"), r["Location"])

    def test_regular_user_is_forbidden(self):
        self.client.force_login(self.fan)
        r = self.client.get(reverse("panel_dashboard"))
        self.assertEqual(r.status_code, 403)
        r = self.client.post(reverse("panel_chef_add"), {"name": "Sneaky"})
        self.assertEqual(r.status_code, 403)
        self.assertFalse(Chef.objects.filter(name="Sneaky").exists())

    def test_commissioners_group_has_access(self):
        self.client.force_login(self.member)
        r = self.client.get(reverse("panel_dashboard"), {"tab": "scores"})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.context["tab"], "scores")

    def test_login_page(self):
        r = self.client.get(reverse("login"))
        self.assertEqual(r.status_code, 200)


class PanelActionsTest(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.staff = User.objects.create_user(username="commissioner", password="Pass1234!", is_staff=True)
        cls.amy = Chef.objects.create(name="Amy")
        cls.ep1 = Episode.objects.create(episode_number=1)
        cls.team = Team.objects.create(name="Flavor Favorites", owner="Alex")

    def setUp(self):
        self.client.force_login(self.staff)

    def test_dashboard_unknown_tab_defaults_to_chefs(self):
        r = self.client.get(reverse("panel_dashboard"), {"tab": "nope"})
        self.assertEqual(r.context["tab"], "chefs")

    def test_add_chef(self):
        r = self.client.post(reverse("panel_chef_add"), {"name": "Chef Lucia"}, follow=True)
        self.assertTrue(Chef.objects.filter(name="Chef Lucia").exists())
        self.assertContains(r, "Chef Chef Lucia added successfully!")

    def test_add_chef_duplicate_name(self):
        self.client.post(reverse("panel_chef_add"), {"name": "Amy"})
        self.assertEqual(Chef.objects.filter(name="Amy").count(), 1)

    def test_get_on_post_only_view(self):
        r = self.client.get(reverse("panel_chef_add"))
        self.assertEqual(r.status_code, 405)

    def test_chef_status_syncs_legacy_flag(self):
        self.client.post(reverse("panel_chef_status", args=[self.amy.id]), {"status": "eliminated"})
        self.amy.refresh_from_db()
        self.assertEqual(self.amy.status, "eliminated")
        self.assertTrue(self.amy.eliminated)

        self.client.post(reverse("panel_chef_status", args=[self.amy.id]), {"status": "lck"})
        self.amy.refresh_from_db()
        self.assertEqual(self.amy.normalized_status, "lck")
        self.assertFalse(self.amy.eliminated)

    def test_add_team_and_episode(self):
        self.client.post(reverse("panel_team_add"), {"name": "Sous Savants", "owner": "Jordan"})
        self.assertTrue(Team.objects.filter(name="Sous Savants", owner="Jordan").exists())

        self.client.post(
            reverse("panel_episode_add"),
            {"episode_number": 2, "title": "Restaurant Wars", "air_date": "2025-03-20"},
        )
        self.assertTrue(Episode.objects.filter(episode_number=2).exists())

    def test_episode_number_must_be_unique(self):
        r = self.client.post(reverse("panel_episode_add"), {"episode_number": 1}, follow=True)
        self.assertEqual(Episode.objects.filter(episode_number=1).count(), 1)
        self.assertContains(r, "Error adding episode")

    def test_score_upsert(self):
        url = reverse("panel_score_save")
        r = self.client.post(
            url,
            {"chef": self.amy.id, "episode": self.ep1.id, "score": 5, "elimination_winner": "on"},
            follow=True,
        )
        self.assertContains(r, "Score added successfully!")
        score = ChefScore.objects.get(chef=self.amy, episode=self.ep1)
        self.assertEqual(score.score, 5)
        self.assertTrue(score.elimination_winner)

        r = self.client.post(url, {"chef": self.amy.id, "episode": self.ep1.id, "score": 0}, follow=True)
        self.assertContains(r, "Score updated successfully!")
        self.assertEqual(ChefScore.objects.filter(chef=self.amy, episode=self.ep1).count(), 1)
        score.refresh_from_db()
        self.assertEqual(score.score, 0)
        self.assertFalse(score.elimination_winner)

    def test_score_is_not_derived_from_flags(self):
        self.client.post(
            reverse("panel_score_save"),
            {"chef": self.amy.id, "episode": self.ep1.id, "score": 1, "quickfire_winner": "on"},
        )
        self.assertEqual(ChefScore.objects.get(chef=self.amy).score, 1)

    def test_roster_add_and_remove(self):
        url = reverse("panel_team_roster", args=[self.team.id])
        r = self.client.get(url)
        self.assertEqual(r.status_code, 200)

        self.client.post(url, {"action": "add", "chef": self.amy.id})
        self.assertTrue(TeamChef.objects.filter(team=self.team, chef=self.amy).exists())

        self.client.post(url, {"action": "remove", "chef": self.amy.id})
        self.assertFalse(TeamChef.objects.filter(team=self.team, chef=self.amy).exists())

    def test_roster_remove_bad_id_is_404(self):
        url = reverse("panel_team_roster", args=[self.team.id])
        r = self.client.post(url, {"action": "remove", "chef": "abc"})
        self.assertEqual(r.status_code, 404)

    @override_settings(LEAGUE_ROSTER_MAX_CHEFS=1)
    def test_roster_full(self):
        bob = Chef.objects.create(name="Bob")
        TeamChef.objects.create(team=self.team, chef=self.amy)
        url = reverse("panel_team_roster", args=[self.team.id])

        r = self.client.post(url, {"action": "add", "chef": bob.id}, follow=True)
        self.assertContains(r, "Teams can have a maximum of 1 chefs")
        self.assertEqual(self.team.roster_size(), 1)


class ServicesTest(TestCase):
    @override_settings(LEAGUE_ROSTER_MAX_CHEFS=2)
    def test_add_chef_to_team_respects_limit(self):
        team = Team.objects.create(name="Kitchen Killers")
        chefs = [Chef.objects.create(name=n) for n in ("A", "B", "C")]
        services.add_chef_to_team(team, chefs[0])
        services.add_chef_to_team(team, chefs[1])
        with self.assertRaises(RosterFull) as ctx:
            services.add_chef_to_team(team, chefs[2])
        self.assertEqual(ctx.exception.limit, 2)
        self.assertEqual(team.roster_size(), 2)

    def test_remove_missing_chef(self):
        team = Team.objects.create(name="Culinary Champions")
        chef = Chef.objects.create(name="Zoe")
        self.assertFalse(services.remove_chef_from_team(team, chef))

    def test_save_score_returns_created_flag(self):
        chef = Chef.objects.create(name="Emma")
        ep = Episode.objects.create(episode_number=3)
        _, created = services.save_score(chef, ep, 3, {"quickfire_winner": True})
        self.assertTrue(created)
        obj, created = services.save_score(chef, ep, -2)
        self.assertFalse(created)
        self.assertEqual(obj.score, -2)
        self.assertFalse(obj.quickfire_winner)

    @override_settings(LEAGUE_ROSTER_MAX_CHEFS=1)
    def test_re_adding_chef_on_full_team_is_a_no_op(self):
        team = Team.objects.create(name="Sous Savants")
        chef = Chef.objects.create(name="Lucia")
        first = services.add_chef_to_team(team, chef)
        again = services.add_chef_to_team(team, chef)
        self.assertEqual(first.pk, again.pk)
        self.assertEqual(team.roster_size(), 1)
