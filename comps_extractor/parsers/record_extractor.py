"""Sale comparables record extraction from reconstructed rows.

Rows are scanned top to bottom with one row of look-ahead. A row whose first
cell is a sale month ("Jun-22") is a primary row and starts a record; the row
right after it, if it is not itself a primary row, is a continuation row
holding wrapped text for the record's text columns. Everything else (table
headers, footers, prose) is skipped.

Field extraction from a primary row is anchor-and-advance: an ordered list of
``FieldRule`` entries is applied against an ``ExtractionState`` accumulator,
and each rule only looks at fragments after the last consumed one. The
x-position of every field found is kept in the state's column map, which is
what continuation fragments are aligned against.

Example primary row (cells left-to-right):
    Jun-22 | 640 Columbia Street | Amazon | Brooklyn | 336,350 | $330,000,000 |
    981 | 3.5% | CBREI | DH Property Holdings | Goldman
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from ..config.settings import X_THRESHOLD, CAP_RATE_MAX, MIN_PRIMARY_FRAGMENTS
from ..models import Row, SaleComparable, TEXT_FIELDS, NUMERIC_FIELDS
from ..utils.date_parser import is_sale_date
from ..utils.number_parser import (
    SQUARE_FEET_PATTERN,
    PRICE_PATTERN,
    PRICE_PER_SF_PATTERN,
    PERCENT_PATTERN,
    parse_integer_amount,
    parse_percentage,
    derive_price_per_sf,
)
from ..utils.column_alignment import find_aligned_column, assign_column_by_position
from .row_reconstructor import row_text

logger = logging.getLogger(__name__)

NOTES_FIELD = 'notes'


class RuleKind(Enum):
    """How a rule picks its fragment."""
    SEARCH = "search"   # first later fragment accepted by the matcher
    NEXT = "next"       # the fragment right after the last consumed one
    REST = "rest"       # every remaining fragment, joined


@dataclass(frozen=True)
class FieldRule:
    """
    One step of the anchor-and-advance field search.

    Attributes:
        field: Record field name
        kind: How the fragment is picked
        matcher: Predicate on cell text (SEARCH rules only)
        parse: Converts the matched text to the field value
        requires: Field that must already be anchored for this rule to run
        required: When True and nothing matches, the row yields no record
    """
    field: str
    kind: RuleKind
    matcher: Optional[Callable[[str], bool]] = None
    parse: Callable[[str], Any] = str
    requires: Optional[str] = None
    required: bool = False


@dataclass
class ExtractionState:
    """Accumulator threaded through the rule list for one primary row."""
    last_consumed_index: int = -1
    column_positions: Dict[str, float] = field(default_factory=dict)
    values: Dict[str, Any] = field(default_factory=dict)

    def anchor(self, field_name: str, index: int, value: Any, x: float) -> None:
        """Record a found field and advance past it."""
        self.values[field_name] = value
        self.column_positions[field_name] = x
        self.last_consumed_index = index


@dataclass
class ExtractionStats:
    """Diagnostics for the rows seen by one extractor."""
    rows_scanned: int = 0
    rows_skipped: int = 0
    continuations_merged: int = 0
    records: int = 0


def build_field_rules(cap_rate_max: float = CAP_RATE_MAX) -> List[FieldRule]:
    """
    Build the ordered rule list for the comparables table.

    The cap-rate matcher rejects values at or above ``cap_rate_max`` so that
    a stray larger numeral after the price columns is not read as a rate.
    """
    def cap_rate_matcher(text: str) -> bool:
        if not PERCENT_PATTERN.match(text):
            return False
        value = parse_percentage(text)
        return value is not None and value < cap_rate_max

    return [
        FieldRule('date', RuleKind.SEARCH, matcher=is_sale_date, required=True),
        FieldRule('property_name', RuleKind.NEXT),
        FieldRule('major_tenant', RuleKind.NEXT),
        FieldRule('borough_market', RuleKind.NEXT),
        FieldRule('square_feet', RuleKind.SEARCH,
                  matcher=lambda t: bool(SQUARE_FEET_PATTERN.match(t)),
                  parse=parse_integer_amount),
        FieldRule('price', RuleKind.SEARCH,
                  matcher=lambda t: bool(PRICE_PATTERN.match(t)),
                  parse=parse_integer_amount,
                  requires='square_feet'),
        FieldRule('price_per_sf', RuleKind.SEARCH,
                  matcher=lambda t: bool(PRICE_PER_SF_PATTERN.match(t)),
                  parse=parse_integer_amount,
                  requires='price'),
        FieldRule('cap_rate', RuleKind.SEARCH,
                  matcher=cap_rate_matcher,
                  parse=parse_percentage,
                  requires='price'),
        FieldRule('purchaser', RuleKind.NEXT, requires='cap_rate'),
        FieldRule('seller', RuleKind.REST, requires='cap_rate'),
    ]


class RecordExtractor:
    """
    Extract sale comparable records from one page's rows.

    Usage:
        extractor = RecordExtractor(x_threshold=10)
        records = extractor.extract_records(rows, page_number=3)
        records = backfill_price_per_sf(records)
    """

    def __init__(
        self,
        x_threshold: float = X_THRESHOLD,
        cap_rate_max: float = CAP_RATE_MAX,
        min_primary_fragments: int = MIN_PRIMARY_FRAGMENTS
    ):
        """
        Initialize extractor.

        Args:
            x_threshold: Continuation column alignment tolerance; fragments
                further than twice this from every column go to notes
            cap_rate_max: Exclusive upper bound for a cap rate
            min_primary_fragments: Primary rows with fewer cells are skipped
        """
        self.x_threshold = x_threshold
        self.cap_rate_max = cap_rate_max
        self.min_primary_fragments = min_primary_fragments
        self.rules = build_field_rules(cap_rate_max)
        self.stats = ExtractionStats()

    @staticmethod
    def is_primary_row(row: Row) -> bool:
        """A row is primary when its first cell is a sale month."""
        return bool(row) and is_sale_date(row[0].text)

    def extract_records(
        self,
        rows: List[Row],
        page_number: Optional[int] = None
    ) -> List[SaleComparable]:
        """
        Scan rows and extract one record per primary row.

        Args:
            rows: Rows of one page, top to bottom
            page_number: Page number for provenance and log context

        Returns:
            Records in row order
        """
        records: List[SaleComparable] = []

        i = 0
        while i < len(rows):
            row = rows[i]
            self.stats.rows_scanned += 1

            # SCANNING: headers, footers and prose are skipped
            if not self.is_primary_row(row):
                i += 1
                continue

            if len(row) < self.min_primary_fragments:
                logger.debug(
                    f"Page {page_number} row {i}: primary candidate with {len(row)} cells skipped: "
                    f"{row_text(row)}"
                )
                self.stats.rows_skipped += 1
                i += 1
                continue

            # AT_PRIMARY: look ahead one row for wrapped text
            continuation = None
            if i + 1 < len(rows) and rows[i + 1] and not self.is_primary_row(rows[i + 1]):
                continuation = rows[i + 1]

            try:
                record = self.extract_record(row, continuation, page_number)
            except Exception as e:
                logger.warning(
                    f"Page {page_number} row {i}: skipping malformed row ({e}): {row_text(row)}"
                )
                self.stats.rows_skipped += 1
                i += 1
                continue

            if record is None:
                self.stats.rows_skipped += 1
                i += 1
                continue

            records.append(record)
            self.stats.records += 1
            if continuation is not None:
                self.stats.continuations_merged += 1
                self.stats.rows_scanned += 1
                i += 2
            else:
                i += 1

        logger.debug(f"Page {page_number}: {len(records)} records from {len(rows)} rows")
        return records

    def extract_record(
        self,
        row: Row,
        continuation: Optional[Row] = None,
        page_number: Optional[int] = None
    ) -> Optional[SaleComparable]:
        """
        Build a record from a primary row and optional continuation row.

        Args:
            row: Primary row, sorted by x
            continuation: Following row to fold into text fields
            page_number: Page number for provenance

        Returns:
            SaleComparable, or None if the row has no date anchor

        Raises:
            ValueError: If a numeric cell cannot be converted
        """
        state = self.apply_rules(row)
        if state is None:
            return None

        if continuation:
            self.merge_continuation(state, continuation)

        values = state.values
        derived = False
        if not values.get('price_per_sf'):
            values['price_per_sf'] = derive_price_per_sf(
                values.get('price', 0), values.get('square_feet', 0)
            )
            derived = values['price_per_sf'] > 0

        return SaleComparable(
            date=values['date'],
            property_name=values.get('property_name', ''),
            major_tenant=values.get('major_tenant', ''),
            borough_market=values.get('borough_market', ''),
            square_feet=values.get('square_feet', 0),
            price=values.get('price', 0),
            price_per_sf=values['price_per_sf'],
            cap_rate=values.get('cap_rate', 0),
            purchaser=values.get('purchaser', ''),
            seller=values.get('seller', ''),
            notes=values.get(NOTES_FIELD),
            page_number=page_number,
            price_per_sf_derived=derived,
        )

    def apply_rules(self, row: Row) -> Optional[ExtractionState]:
        """
        Run the field rules over a primary row.

        Args:
            row: Primary row, sorted by x

        Returns:
            Final state, or None if a required field was not found
        """
        texts = [f.text.strip() for f in row]
        state = ExtractionState()

        for rule in self.rules:
            if rule.requires and rule.requires not in state.column_positions:
                continue

            start = state.last_consumed_index + 1

            if rule.kind is RuleKind.NEXT:
                if start < len(row):
                    state.anchor(rule.field, start, rule.parse(texts[start]), row[start].x)
                else:
                    state.values[rule.field] = ''
                    state.last_consumed_index = start
                continue

            if rule.kind is RuleKind.REST:
                remaining = texts[start:]
                state.values[rule.field] = ", ".join(remaining)
                if remaining:
                    state.anchor(rule.field, len(row) - 1, state.values[rule.field], row[start].x)
                continue

            index = next(
                (j for j in range(start, len(row)) if rule.matcher(texts[j])),
                None
            )
            if index is None:
                if rule.required:
                    return None
                continue

            state.anchor(rule.field, index, rule.parse(texts[index]), row[index].x)

        return state

    def merge_continuation(self, state: ExtractionState, continuation: Row) -> None:
        """
        Fold continuation fragments into the record's text fields.

        First pass: each text column claims the unclaimed fragments inside
        its alignment band. Second pass: leftovers, left to right, go to the
        nearest column overall, or to notes when that column is more than
        twice the threshold away. Numeric columns are never extended.

        Args:
            state: State returned by apply_rules (modified in place)
            continuation: Continuation row
        """
        positions = state.column_positions
        claimed = [False] * len(continuation)

        for column in TEXT_FIELDS:
            if column not in positions:
                continue
            for idx, fragment in enumerate(continuation):
                if claimed[idx]:
                    continue
                if find_aligned_column(fragment.x, positions, self.x_threshold, [column]):
                    self._append_text(state.values, column, fragment.text)
                    claimed[idx] = True

        leftovers = sorted(
            (f for f, used in zip(continuation, claimed) if not used),
            key=lambda f: f.x
        )
        for fragment in leftovers:
            column = assign_column_by_position(
                fragment.x, positions, self.x_threshold * 2, fallback=NOTES_FIELD
            )
            if column in NUMERIC_FIELDS:
                logger.debug(f"Dropping continuation text under numeric column {column}: {fragment.text!r}")
                continue
            if column == 'date':
                column = NOTES_FIELD
            self._append_text(state.values, column, fragment.text)

    @staticmethod
    def _append_text(values: Dict[str, Any], column: str, text: str) -> None:
        text = text.strip()
        values[column] = f"{values[column]} {text}" if values.get(column) else text


def backfill_price_per_sf(records: List[SaleComparable]) -> List[SaleComparable]:
    """
    Derive price per SF wherever it is zero but price and area are known.

    Args:
        records: Records to normalise (modified in place)

    Returns:
        The same list, for chaining
    """
    for record in records:
        if not record.price_per_sf and record.price > 0 and record.square_feet > 0:
            record.price_per_sf = derive_price_per_sf(record.price, record.square_feet)
            record.price_per_sf_derived = True
            logger.debug(f"Derived price per SF {record.price_per_sf} for {record.date} {record.property_name}")
    return records
