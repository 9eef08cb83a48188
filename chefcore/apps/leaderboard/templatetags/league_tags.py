from __future__ import annotations

from typing import List

from django import template

from chefcore.apps.scoring.records import Cell
from chefcore.apps.scoring.rules import RULES_BY_FLAG, ScoringRule, points_label

register = template.Library()


@register.filter
def cell_class(cell: Cell) -> str:
    # Ausente != 0: clase propia
    if not cell.is_present:
        return "cell-absent"
    if cell.score > 0:
        return "cell-positive"
    if cell.score < 0:
        return "cell-negative"
    return "cell-zero"


@register.filter
def cell_badges(cell: Cell) -> List[ScoringRule]:
    return [RULES_BY_FLAG[name] for name in cell.flags]


@register.filter
def signed(points: int) -> str:
    return points_label(points)
