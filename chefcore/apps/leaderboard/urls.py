from django.urls import path
from . import views

urlpatterns = [
    # Home: standings de equipos
    path("", views.standings, name="standings"),

    # Matriz chef × episodio (?sort=name|total|status|episode-<n>)
    path("chef-scores/", views.chef_scores, name="chef_scores"),
    path("api/chef-scores/", views.chef_scores_json, name="chef_scores_json"),

    path("rules/", views.rules, name="rules"),
]
