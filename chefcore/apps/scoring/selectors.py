# chefcore/apps/scoring/selectors.py
"""
Lecturas de la base (Chef, Episode, ChefScore, Team) convertidas a records.
El estado del chef se normaliza acá, una sola vez.
Un error de base se propaga como DataAccessError, nunca como lista vacía.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from django.db import DatabaseError

from chefcore.apps.league.models import Chef, ChefScore, Episode, Team, TeamChef

from .exceptions import DataAccessError
from .records import FLAG_NAMES, ChefRecord, ChefStatus, EpisodeRecord, ScoreEventRecord, TeamRecord

logger = logging.getLogger(__name__)


def _fetch(label: str, fn):
    try:
        return fn()
    except DatabaseError as exc:
        logger.error("Error leyendo %s: %s", label, exc)
        raise DataAccessError(f"No se pudo leer {label}") from exc


def list_chefs(chef_ids: Optional[Iterable[int]] = None) -> List[ChefRecord]:
    def q():
        qs = Chef.objects.all().order_by("name")
        if chef_ids is not None:
            qs = qs.filter(id__in=list(chef_ids))
        return [
            ChefRecord(id=c.id, name=c.name, status=ChefStatus.normalize(c.status, c.eliminated))
            for c in qs.only("id", "name", "status", "eliminated")
        ]
    return _fetch("chefs", q)


def list_episodes() -> List[EpisodeRecord]:
    def q():
        return [
            EpisodeRecord(
                id=e.id,
                number=e.episode_number,
                title=e.title,
                air_date=e.air_date,
                is_finale=e.is_finale,
            )
            for e in Episode.objects.all().order_by("episode_number")
        ]
    return _fetch("episodes", q)


def list_score_events(chef_id: Optional[int] = None, episode_id: Optional[int] = None) -> List[ScoreEventRecord]:
    def q():
        qs = ChefScore.objects.all().order_by("id")
        if chef_id is not None:
            qs = qs.filter(chef_id=chef_id)
        if episode_id is not None:
            qs = qs.filter(episode_id=episode_id)
        return [
            ScoreEventRecord(
                chef_id=s.chef_id,
                episode_id=s.episode_id,
                score=s.score,
                **{name: getattr(s, name) for name in FLAG_NAMES},
            )
            for s in qs
        ]
    return _fetch("chef_scores", q)


def list_teams() -> List[TeamRecord]:
    def q():
        roster: Dict[int, List[int]] = {}
        for team_id, chef_id in TeamChef.objects.order_by("id").values_list("team_id", "chef_id"):
            roster.setdefault(team_id, []).append(chef_id)
        return [
            TeamRecord(id=t.id, name=t.name, owner=t.owner, chef_ids=tuple(roster.get(t.id, ())))
            for t in Team.objects.all().order_by("id")
        ]
    return _fetch("teams", q)
