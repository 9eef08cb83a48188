# chefcore/apps/scoring/services/matrix.py
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..exceptions import InvalidSortKey, MatrixInputError
from ..records import Cell, ChefRecord, ChefRow, EpisodeRecord, ScoreEventRecord

logger = logging.getLogger(__name__)

SORT_NAME = "name"
SORT_TOTAL = "total"
SORT_STATUS = "status"
EPISODE_PREFIX = "episode-"

_SORT_ALIASES = {
    "name": SORT_NAME,
    "total": SORT_TOTAL,
    "totalpoints": SORT_TOTAL,
    "status": SORT_STATUS,
}


# ------------------------------
# Columnas (episodios)
# ------------------------------
def sort_episodes(episodes: Iterable[EpisodeRecord]) -> List[EpisodeRecord]:
    """
    Episodios ordenados por número ascendente (sort estable: empates
    conservan el orden de entrada). Un número que no es entero corta todo.
    """
    episodes = list(episodes)
    for ep in episodes:
        if isinstance(ep.number, bool) or not isinstance(ep.number, int):
            raise MatrixInputError(
                f"Episodio id={ep.id} tiene un número inválido: {ep.number!r}"
            )
    return sorted(episodes, key=lambda ep: ep.number)


# ------------------------------
# Armado de la matriz
# ------------------------------
def _index_events(
    events: Iterable[ScoreEventRecord],
) -> Dict[Tuple[int, int], ScoreEventRecord]:
    # Primer match en el orden de entrada gana; los duplicados se ignoran
    index: Dict[Tuple[int, int], ScoreEventRecord] = {}
    duplicates = 0
    for ev in events:
        key = (ev.chef_id, ev.episode_id)
        if key in index:
            duplicates += 1
            continue
        index[key] = ev
    if duplicates:
        logger.warning("Se ignoraron %d puntajes duplicados por (chef, episodio)", duplicates)
    return index


def build(
    chefs: Iterable[ChefRecord],
    episodes: Iterable[EpisodeRecord],
    events: Iterable[ScoreEventRecord],
) -> List[ChefRow]:
    """
    Matriz chef × episodio:
      • columnas = episodios por número ascendente
      • celda = primer puntaje que matchea (chef, episodio), o ausente
      • total = suma de celdas presentes (las ausentes aportan 0)
    Una fila por chef, ordenadas por nombre. Puntajes de chefs/episodios
    que no vienen en la entrada se descartan.
    """
    chefs = list(chefs)
    columns = sort_episodes(episodes)
    index = _index_events(events)

    chef_ids = {c.id for c in chefs}
    episode_ids = {ep.id for ep in columns}
    orphans = sum(1 for (chef_id, ep_id) in index if chef_id not in chef_ids or ep_id not in episode_ids)
    if orphans:
        logger.debug("Se descartaron %d puntajes sin chef/episodio conocido", orphans)

    rows: List[ChefRow] = []
    for chef in chefs:
        cells = tuple(Cell.from_event(index.get((chef.id, ep.id))) for ep in columns)
        total = sum(c.score for c in cells if c.is_present)
        rows.append(ChefRow(chef=chef, cells=cells, total=int(total)))

    return order_rows(rows, SORT_NAME)


# ------------------------------
# Orden de filas
# ------------------------------
def parse_sort_key(key: str) -> Tuple[str, Optional[int]]:
    """
    Devuelve (tipo, índice_de_columna):
      'name' | 'total' / 'totalPoints' | 'status' -> (tipo, None)
      'episode-<n>' (n desde 1, como en la URL)  -> ('episode', n - 1)
    """
    raw = (key or "").strip()
    lowered = raw.lower()
    if lowered in _SORT_ALIASES:
        return _SORT_ALIASES[lowered], None
    if lowered.startswith(EPISODE_PREFIX):
        try:
            number = int(lowered[len(EPISODE_PREFIX):])
        except ValueError:
            raise InvalidSortKey(f"Clave de orden inválida: {raw!r}") from None
        if number < 1:
            raise InvalidSortKey(f"Columna de episodio inválida: {raw!r}")
        return "episode", number - 1
    raise InvalidSortKey(f"Clave de orden inválida: {raw!r}")


def _episode_key(index: int):
    def key(row: ChefRow) -> Tuple[int, int]:
        cell = row.cells[index]
        # Ausente siempre al final, debajo de cualquier puntaje (aun negativo)
        if not cell.is_present:
            return (1, 0)
        return (0, -cell.score)
    return key


def order_rows(rows: Sequence[ChefRow], key: str) -> List[ChefRow]:
    """
    Nueva lista ordenada según `key` (ver parse_sort_key). Todos los sorts
    son estables: los empates quedan en el orden recibido.
      • name: ascendente (case-insensitive; en empate, minúscula primero)
      • total: descendente
      • status: active, lck, eliminated; dentro del grupo total descendente
      • episode-<n>: puntaje de esa columna descendente, ausentes al final
    """
    kind, index = parse_sort_key(key)
    rows = list(rows)

    if kind == SORT_NAME:
        # Empate solo por mayúsculas: minúscula primero ("amy" antes que "Amy")
        return sorted(rows, key=lambda r: (r.chef.name.casefold(), r.chef.name.swapcase()))
    if kind == SORT_TOTAL:
        return sorted(rows, key=lambda r: -r.total)
    if kind == SORT_STATUS:
        return sorted(rows, key=lambda r: (r.chef.status.rank, -r.total))

    width = len(rows[0].cells) if rows else 0
    if rows and index >= width:
        raise InvalidSortKey(f"No existe la columna {index + 1} (hay {width} episodios)")
    return sorted(rows, key=_episode_key(index))
