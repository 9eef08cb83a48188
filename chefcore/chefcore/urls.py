from django.contrib import admin
from django.urls import path, include

from chefcore.apps.leaderboard import views as leaderboard_views

urlpatterns = [
    path("admin/", admin.site.urls),

    # Login / logout del panel
    path("accounts/", include("chefcore.apps.accounts.urls")),

    # API healthcheck
    path("api/health/", leaderboard_views.health, name="api_health"),

    # Panel de administración de la liga (solo staff)
    path("panel/", include("chefcore.apps.panel.urls")),

    # Páginas públicas: standings, chef scores, reglas
    path("", include("chefcore.apps.leaderboard.urls")),
]
