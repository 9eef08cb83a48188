from __future__ import annotations

from typing import Dict, NamedTuple, Tuple


class ScoringRule(NamedTuple):
    flag: str
    label: str
    short: str
    points: int


# Tabla publicada en /rules/. Solo informativa: el admin carga el score a mano.
SCORING_RULES: Tuple[ScoringRule, ...] = (
    ScoringRule("quickfire_winner", "Winning Quickfire Challenge", "QF★", 3),
    ScoringRule("quickfire_top", "Top Section in Quickfire", "QF↑", 1),
    ScoringRule("quickfire_bottom", "Bottom Section in Quickfire", "QF↓", -1),
    ScoringRule("elimination_winner", "Winning Elimination Challenge", "EC★", 5),
    ScoringRule("elimination_top", "Top in Elimination Challenge", "EC↑", 2),
    ScoringRule("elimination_bottom", "Bottom in Elimination Challenge", "EC↓", -2),
    ScoringRule("lck_winner", "Last Chance Kitchen Weekly Winner", "LCK★", 1),
)

RULES_BY_FLAG: Dict[str, ScoringRule] = {r.flag: r for r in SCORING_RULES}


def points_label(points: int) -> str:
    return f"+{points}" if points > 0 else str(points)
