"""Cluster positioned fragments into visual rows.

A page's fragments arrive in no particular order. Rows are rebuilt with a
single sweep over the fragments sorted by y: a fragment joins the open row
while it stays within ``y_threshold`` of the row's first fragment, otherwise
the row is closed and a new one starts. Each closed row is then ordered
left-to-right by x.
"""

import logging
from typing import Iterable, List

from ..config.settings import Y_THRESHOLD
from ..models import Fragment, Row

logger = logging.getLogger(__name__)


def reconstruct_rows(
    fragments: Iterable[Fragment],
    y_threshold: float = Y_THRESHOLD
) -> List[Row]:
    """
    Group fragments into rows by vertical proximity.

    Args:
        fragments: Page fragments in any order
        y_threshold: Largest y distance from a row's first fragment that
            still belongs to that row

    Returns:
        Rows in top-to-bottom order, each sorted by ascending x. No row is empty.

    Raises:
        ValueError: If y_threshold is negative

    Example:
        >>> rows = reconstruct_rows([
        ...     Fragment("Amazon", 200, 101.2),
        ...     Fragment("Jun-22", 40, 100.0),
        ...     Fragment("Notes", 40, 130.0),
        ... ])
        >>> [[f.text for f in row] for row in rows]
        [['Jun-22', 'Amazon'], ['Notes']]
    """
    if y_threshold < 0:
        raise ValueError(f"y_threshold must be non-negative, got {y_threshold}")

    visible = [f for f in fragments if f.text and f.text.strip()]
    # sorted() is stable, so equal-y fragments keep their input order
    visible = sorted(visible, key=lambda f: f.y)

    rows: List[Row] = []
    current_row: Row = []
    current_row_y = 0.0

    for fragment in visible:
        if current_row and abs(fragment.y - current_row_y) > y_threshold:
            rows.append(_close_row(current_row))
            current_row = []

        if not current_row:
            current_row_y = fragment.y

        current_row.append(fragment)

    if current_row:
        rows.append(_close_row(current_row))

    logger.debug(f"Reconstructed {len(rows)} rows from {len(visible)} fragments")
    return rows


def _close_row(row: Row) -> Row:
    """Order a finished row left-to-right."""
    return sorted(row, key=lambda f: f.x)


def row_text(row: Row, separator: str = " | ") -> str:
    """Render a row's cell texts for logs and debug output."""
    return separator.join(f.text.strip() for f in row)
