from django.conf import settings


def league(request):
    """Datos de la liga disponibles en todos los templates."""
    return {
        "season_label": getattr(settings, "LEAGUE_SEASON_LABEL", ""),
    }
