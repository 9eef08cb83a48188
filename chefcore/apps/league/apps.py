from django.apps import AppConfig


class LeagueConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "chefcore.apps.league"
    verbose_name = "League (Chefs, Teams, Episodes)"
