"""Column alignment utilities for x-positioned fragments.

Columns are identified by the x-coordinate at which a field was found in a
record's primary row. Continuation fragments are matched back to those
columns by horizontal distance.
"""

import logging
import math
from typing import Dict, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)


def is_aligned(x: float, column_x: float, threshold: float) -> bool:
    """
    Check whether a position falls inside a column's alignment band.

    The band is open: a distance equal to ``threshold`` is not aligned.

    Example:
        >>> is_aligned(503.0, 498.5, 10)
        True
    """
    return abs(x - column_x) < threshold


def find_aligned_column(
    x: float,
    column_positions: Dict[str, float],
    threshold: float,
    columns: Optional[Iterable[str]] = None
) -> Optional[str]:
    """
    Find the first column (in ``columns`` order) whose band contains ``x``.

    Args:
        x: Fragment position
        column_positions: Column name to x position
        threshold: Alignment tolerance
        columns: Columns to consider, in priority order (defaults to map order)

    Returns:
        Column name, or None if no band contains ``x``
    """
    for column in (columns if columns is not None else column_positions):
        if column in column_positions and is_aligned(x, column_positions[column], threshold):
            return column
    return None


def find_nearest_column(
    x: float,
    column_positions: Dict[str, float]
) -> Tuple[Optional[str], float]:
    """
    Find the column whose position is nearest to ``x``.

    Ties go to the column inserted first in ``column_positions``, which makes
    the result deterministic for equidistant columns.

    Args:
        x: Fragment position
        column_positions: Column name to x position

    Returns:
        (column name, distance), or (None, inf) when no positions are known

    Example:
        >>> find_nearest_column(300, {'purchaser': 280, 'seller': 320})
        ('purchaser', 20)
    """
    nearest_column = None
    min_distance = math.inf

    for column, position in column_positions.items():
        distance = abs(x - position)
        if distance < min_distance:
            min_distance = distance
            nearest_column = column

    return nearest_column, min_distance


def assign_column_by_position(
    x: float,
    column_positions: Dict[str, float],
    max_distance: float,
    fallback: str = 'notes'
) -> str:
    """
    Assign a position to its nearest column, with an escape hatch.

    Args:
        x: Fragment position
        column_positions: Column name to x position
        max_distance: Largest acceptable distance to the nearest column
        fallback: Column returned when nothing is close enough

    Returns:
        Nearest column name, or ``fallback``
    """
    column, distance = find_nearest_column(x, column_positions)
    if column is None or distance > max_distance:
        logger.debug(f"x={x} is {distance} from nearest column; using '{fallback}'")
        return fallback
    return column
