# chefcore/apps/panel/services.py
from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from django.conf import settings
from django.db import transaction

from chefcore.apps.league.models import Chef, ChefScore, Episode, Team, TeamChef, STATUS_ELIMINATED
from chefcore.apps.scoring.exceptions import RosterFull
from chefcore.apps.scoring.records import FLAG_NAMES

logger = logging.getLogger(__name__)


def roster_limit() -> int:
    return int(getattr(settings, "LEAGUE_ROSTER_MAX_CHEFS", 3))


# ------------------------------
# Puntajes
# ------------------------------
@transaction.atomic
def save_score(chef: Chef, episode: Episode, score: int, flags: Optional[Dict[str, bool]] = None) -> Tuple[ChefScore, bool]:
    """
    Upsert por (chef, episodio): si ya existe se actualiza, si no se crea.
    Score y flags se guardan tal cual vienen.
    """
    flags = flags or {}
    values = {"score": int(score)}
    for name in FLAG_NAMES:
        values[name] = bool(flags.get(name, False))

    obj, created = ChefScore.objects.update_or_create(chef=chef, episode=episode, defaults=values)
    logger.info(
        "Score %s: %s · Ep %s = %s",
        "creado" if created else "actualizado",
        chef.name,
        episode.episode_number,
        obj.score,
    )
    return obj, created


# ------------------------------
# Estado del chef
# ------------------------------
def set_chef_status(chef: Chef, status: str) -> Chef:
    # Se mantiene el flag legacy alineado para lectores viejos
    chef.status = status
    chef.eliminated = status == STATUS_ELIMINATED
    chef.save(update_fields=["status", "eliminated"])
    logger.info("Chef %s ahora está '%s'", chef.name, status)
    return chef


# ------------------------------
# Rosters
# ------------------------------
@transaction.atomic
def add_chef_to_team(team: Team, chef: Chef) -> TeamChef:
    limit = roster_limit()
    # Lock del equipo para que dos altas simultáneas no pasen el límite
    team = Team.objects.select_for_update().get(pk=team.pk)
    existing = TeamChef.objects.filter(team=team, chef=chef).first()
    if existing is not None:
        return existing
    if TeamChef.objects.filter(team=team).count() >= limit:
        raise RosterFull(team.name, limit)
    slot = TeamChef.objects.create(team=team, chef=chef)
    logger.info("Roster: %s agregado a %s", chef.name, team.name)
    return slot


def remove_chef_from_team(team: Team, chef: Chef) -> bool:
    deleted, _ = TeamChef.objects.filter(team=team, chef=chef).delete()
    if deleted:
        logger.info("Roster: %s quitado de %s", chef.name, team.name)
    return bool(deleted)
