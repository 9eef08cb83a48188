from __future__ import annotations


class ScoringError(Exception):
    """Base de errores del módulo de scoring."""


class MatrixInputError(ScoringError, ValueError):
    """Entrada inválida para el armado de la matriz (ej. episode_number no entero)."""


class InvalidSortKey(ScoringError, ValueError):
    """Clave de orden desconocida o columna de episodio fuera de rango."""


class DataAccessError(ScoringError):
    """Fallo leyendo la base. Distinto de 'no hay filas'."""


class RosterFull(ScoringError):
    """El equipo ya tiene el máximo de chefs permitido."""

    def __init__(self, team_name: str, limit: int):
        self.team_name = team_name
        self.limit = limit
        super().__init__(f"{team_name} ya tiene el máximo de {limit} chefs.")
