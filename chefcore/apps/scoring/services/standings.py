# chefcore/apps/scoring/services/standings.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from ..records import ChefRecord, ChefRow, ChefStatus, TeamRecord


@dataclass(frozen=True)
class ChefStanding:
    chef: ChefRecord
    total: int


@dataclass(frozen=True)
class TeamStanding:
    team: TeamRecord
    chefs: Tuple[ChefStanding, ...]
    total: int
    rank: int

    @property
    def chefs_remaining(self) -> int:
        return sum(1 for c in self.chefs if c.chef.status == ChefStatus.ACTIVE)


# Esquemas pastel por equipo (clases CSS en static/css/league.css)
TEAM_COLORS: Tuple[str, ...] = (
    "sky",
    "blue",
    "emerald",
    "purple",
    "amber",
    "pink",
    "teal",
    "indigo",
)


def team_color(team_id: int) -> str:
    return TEAM_COLORS[(team_id - 1) % len(TEAM_COLORS)]


def compute_standings(teams: Iterable[TeamRecord], chef_rows: Iterable[ChefRow]) -> List[TeamStanding]:
    """
    Tabla de equipos:
      • total del equipo = suma de totales de sus chefs (filas de la matriz)
      • chefs dentro del equipo por total descendente
      • equipos por total descendente; empate -> más chefs activos;
        si sigue el empate queda el orden de entrada
    Chefs del roster que no están en la matriz se ignoran.
    """
    by_chef: Dict[int, ChefRow] = {row.chef.id: row for row in chef_rows}

    provisional: List[Tuple[TeamRecord, Tuple[ChefStanding, ...], int]] = []
    for team in teams:
        members = [
            ChefStanding(chef=by_chef[cid].chef, total=by_chef[cid].total)
            for cid in team.chef_ids
            if cid in by_chef
        ]
        members.sort(key=lambda m: -m.total)
        total = sum(m.total for m in members)
        provisional.append((team, tuple(members), total))

    def remaining(item) -> int:
        return sum(1 for m in item[1] if m.chef.status == ChefStatus.ACTIVE)

    provisional.sort(key=lambda item: (-item[2], -remaining(item)))

    return [
        TeamStanding(team=team, chefs=members, total=total, rank=pos)
        for pos, (team, members, total) in enumerate(provisional, start=1)
    ]
