from django.urls import path
from . import views

urlpatterns = [
    # Dashboard con tabs (?tab=chefs|teams|episodes|scores)
    path("", views.dashboard, name="panel_dashboard"),

    path("chefs/add/", views.chef_add, name="panel_chef_add"),
    path("chefs/<int:chef_id>/status/", views.chef_status, name="panel_chef_status"),

    path("teams/add/", views.team_add, name="panel_team_add"),
    path("teams/<int:team_id>/roster/", views.team_roster, name="panel_team_roster"),

    path("episodes/add/", views.episode_add, name="panel_episode_add"),

    # Alta o edición de puntaje por (chef, episodio)
    path("scores/save/", views.score_save, name="panel_score_save"),
]
