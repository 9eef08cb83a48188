# chefcore/apps/panel/views.py
from __future__ import annotations

from functools import wraps
from typing import Any, Dict

from django.contrib import messages
from django.http import HttpRequest, HttpResponse, HttpResponseForbidden
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.views.decorators.http import require_POST

from chefcore.apps.league.models import Chef, ChefScore, Episode, Team, TeamChef
from chefcore.apps.scoring.exceptions import RosterFull

from . import services
from .forms import ChefForm, ChefStatusForm, EpisodeForm, RosterAddForm, ScoreForm, TeamForm

TABS = ("chefs", "teams", "episodes", "scores")


# -------------------------------
# Utilidades
# -------------------------------
def _user_is_commissioner(request: HttpRequest) -> bool:
    u = request.user
    if not u.is_authenticated:
        return False
    # Staff o miembros del grupo "commissioners"
    return u.is_staff or u.is_superuser or u.groups.filter(name="commissioners").exists()


def commissioner_required(view_func):
    @wraps(view_func)
    def _wrapped(request: HttpRequest, *args, **kwargs):
        if not request.user.is_authenticated:
            from django.contrib.auth.views import redirect_to_login
            return redirect_to_login(request.get_full_path())
        if not _user_is_commissioner(request):
            return HttpResponseForbidden("Solo administradores de la liga.")
        return view_func(request, *args, **kwargs)
    return _wrapped


def _int_or_none(value) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _back_to(tab: str):
    return redirect(f"{reverse('panel_dashboard')}?tab={tab}")


def _form_errors(form) -> str:
    parts = []
    for field, errors in form.errors.items():
        label = form.fields[field].label if field in form.fields else ""
        parts.append(f"{label or field}: {' '.join(errors)}" if field != "__all__" else " ".join(errors))
    return "; ".join(parts)


# -------------------------------
# Dashboard
# -------------------------------
@commissioner_required
def dashboard(request: HttpRequest) -> HttpResponse:
    tab = request.GET.get("tab") or "chefs"
    if tab not in TABS:
        tab = "chefs"

    teams = list(Team.objects.all().order_by("id").prefetch_related("roster__chef"))
    ctx: Dict[str, Any] = {
        "tab": tab,
        "tabs": TABS,
        "chefs": Chef.objects.all().order_by("name"),
        "teams": teams,
        "episodes": Episode.objects.all().order_by("episode_number"),
        "recent_scores": ChefScore.objects.select_related("chef", "episode").order_by("-updated_at")[:25],
        "chef_form": ChefForm(),
        "status_form": ChefStatusForm(),
        "team_form": TeamForm(),
        "episode_form": EpisodeForm(),
        "score_form": ScoreForm(),
        "roster_max": services.roster_limit(),
    }
    return render(request, "panel/dashboard.html", ctx)


# -------------------------------
# Chefs
# -------------------------------
@commissioner_required
@require_POST
def chef_add(request: HttpRequest) -> HttpResponse:
    form = ChefForm(request.POST)
    if form.is_valid():
        chef = form.save()
        messages.success(request, f"Chef {chef.name} added successfully!")
    else:
        messages.error(request, f"Error adding chef: {_form_errors(form)}")
    return _back_to("chefs")


@commissioner_required
@require_POST
def chef_status(request: HttpRequest, chef_id: int) -> HttpResponse:
    chef = get_object_or_404(Chef, pk=chef_id)
    form = ChefStatusForm(request.POST)
    if form.is_valid():
        services.set_chef_status(chef, form.cleaned_data["status"])
        messages.success(request, f"{chef.name} updated.")
    else:
        messages.error(request, f"Error updating chef: {_form_errors(form)}")
    return _back_to("chefs")


# -------------------------------
# Equipos
# -------------------------------
@commissioner_required
@require_POST
def team_add(request: HttpRequest) -> HttpResponse:
    form = TeamForm(request.POST)
    if form.is_valid():
        team = form.save()
        messages.success(request, f"Team {team.name} added successfully!")
    else:
        messages.error(request, f"Error adding team: {_form_errors(form)}")
    return _back_to("teams")


@commissioner_required
def team_roster(request: HttpRequest, team_id: int) -> HttpResponse:
    """
    Editor de roster:
      - POST action=add    -> agrega chef (respeta LEAGUE_ROSTER_MAX_CHEFS)
      - POST action=remove -> quita chef
    """
    team = get_object_or_404(Team, pk=team_id)

    if request.method == "POST":
        action = request.POST.get("action")
        if action == "add":
            form = RosterAddForm(request.POST, team=team)
            if form.is_valid():
                chef = form.cleaned_data["chef"]
                try:
                    services.add_chef_to_team(team, chef)
                except RosterFull as exc:
                    messages.error(request, f"Teams can have a maximum of {exc.limit} chefs")
                else:
                    messages.success(request, f"{chef.name} added to {team.name}")
            else:
                messages.error(request, f"Error adding chef to team: {_form_errors(form)}")
        elif action == "remove":
            chef = get_object_or_404(Chef, pk=_int_or_none(request.POST.get("chef")))
            if services.remove_chef_from_team(team, chef):
                messages.success(request, f"{chef.name} removed from {team.name}")
            else:
                messages.error(request, f"{chef.name} is not on {team.name}")
        else:
            messages.error(request, "Unknown roster action.")
        return redirect("panel_team_roster", team_id=team.id)

    slots = TeamChef.objects.filter(team=team).select_related("chef").order_by("chef__name")
    limit = services.roster_limit()
    ctx = {
        "team": team,
        "slots": slots,
        "form": RosterAddForm(team=team),
        "roster_max": limit,
        "is_full": slots.count() >= limit,
    }
    return render(request, "panel/roster.html", ctx)


# -------------------------------
# Episodios
# -------------------------------
@commissioner_required
@require_POST
def episode_add(request: HttpRequest) -> HttpResponse:
    form = EpisodeForm(request.POST)
    if form.is_valid():
        episode = form.save()
        messages.success(request, f"Episode {episode.episode_number} added successfully!")
    else:
        messages.error(request, f"Error adding episode: {_form_errors(form)}")
    return _back_to("episodes")


# -------------------------------
# Puntajes (upsert)
# -------------------------------
@commissioner_required
@require_POST
def score_save(request: HttpRequest) -> HttpResponse:
    form = ScoreForm(request.POST)
    if form.is_valid():
        _, created = services.save_score(
            form.cleaned_data["chef"],
            form.cleaned_data["episode"],
            form.cleaned_data["score"],
            form.flags(),
        )
        messages.success(request, "Score added successfully!" if created else "Score updated successfully!")
    else:
        messages.error(request, f"Error saving score: {_form_errors(form)}")
    return _back_to("scores")
