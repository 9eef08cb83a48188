# chefcore/apps/scoring/records.py
"""
Tipos de valor que consume y produce la matriz de puntajes.
No dependen del ORM: los selectors convierten filas en estos records.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Tuple


FLAG_NAMES: Tuple[str, ...] = (
    "quickfire_winner",
    "quickfire_top",
    "quickfire_bottom",
    "elimination_winner",
    "elimination_top",
    "elimination_bottom",
    "lck_winner",
)


class ChefStatus(str, enum.Enum):
    ACTIVE = "active"
    LCK = "lck"
    ELIMINATED = "eliminated"

    @property
    def rank(self) -> int:
        # active -> lck -> eliminated
        return _STATUS_RANK[self]

    @property
    def label(self) -> str:
        return _STATUS_LABEL[self]

    @classmethod
    def normalize(cls, status: Optional[str], eliminated: Optional[bool] = False) -> "ChefStatus":
        """
        Estado explícito si viene y es válido; si no, se deriva del flag legacy:
          eliminated=True -> ELIMINATED, cualquier otro caso -> ACTIVE.
        """
        if isinstance(status, cls):
            return status
        if status:
            found = _STATUS_ALIASES.get(str(status).strip().lower())
            if found is not None:
                return found
        return cls.ELIMINATED if eliminated else cls.ACTIVE


_STATUS_RANK = {
    ChefStatus.ACTIVE: 0,
    ChefStatus.LCK: 1,
    ChefStatus.ELIMINATED: 2,
}

_STATUS_LABEL = {
    ChefStatus.ACTIVE: "Active",
    ChefStatus.LCK: "LCK",
    ChefStatus.ELIMINATED: "Eliminated",
}

_STATUS_ALIASES = {
    "active": ChefStatus.ACTIVE,
    "lck": ChefStatus.LCK,
    "last-chance-kitchen": ChefStatus.LCK,
    "last_chance_kitchen": ChefStatus.LCK,
    "eliminated": ChefStatus.ELIMINATED,
}


@dataclass(frozen=True)
class ChefRecord:
    id: int
    name: str
    status: ChefStatus = ChefStatus.ACTIVE


@dataclass(frozen=True)
class EpisodeRecord:
    id: int
    number: int
    title: str = ""
    air_date: Optional[date] = None
    is_finale: bool = False


@dataclass(frozen=True)
class ScoreEventRecord:
    chef_id: int
    episode_id: int
    score: int
    quickfire_winner: bool = False
    quickfire_top: bool = False
    quickfire_bottom: bool = False
    elimination_winner: bool = False
    elimination_top: bool = False
    elimination_bottom: bool = False
    lck_winner: bool = False


@dataclass(frozen=True)
class TeamRecord:
    id: int
    name: str
    owner: str = ""
    chef_ids: Tuple[int, ...] = ()


@dataclass(frozen=True)
class Cell:
    """
    Celda (chef, episodio). score=None significa "sin puntaje cargado",
    que NO es lo mismo que un 0.
    """
    score: Optional[int] = None
    quickfire_winner: bool = False
    quickfire_top: bool = False
    quickfire_bottom: bool = False
    elimination_winner: bool = False
    elimination_top: bool = False
    elimination_bottom: bool = False
    lck_winner: bool = False

    @property
    def is_present(self) -> bool:
        return self.score is not None

    @property
    def flags(self) -> Tuple[str, ...]:
        return tuple(name for name in FLAG_NAMES if getattr(self, name))

    @classmethod
    def from_event(cls, event: Optional[ScoreEventRecord]) -> "Cell":
        if event is None:
            return ABSENT
        return cls(score=event.score, **{name: bool(getattr(event, name)) for name in FLAG_NAMES})


ABSENT = Cell()


@dataclass(frozen=True)
class ChefRow:
    chef: ChefRecord
    cells: Tuple[Cell, ...] = field(default_factory=tuple)
    total: int = 0
