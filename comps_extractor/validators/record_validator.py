"""
Record validation.

Checks reconstructed comparables against the table's arithmetic and range
rules so that misaligned rows surface as warnings instead of silently
landing in the export.
"""
import logging
from typing import List, Optional, Tuple
from dataclasses import dataclass

from ..config.settings import CAP_RATE_MAX
from ..models import SaleComparable
from ..utils.date_parser import parse_sale_month
from ..utils.number_parser import derive_price_per_sf

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of validating one record."""
    success: bool
    message: str
    record_index: Optional[int] = None
    expected_price_per_sf: Optional[float] = None
    actual_price_per_sf: Optional[float] = None


class RecordValidator:
    """
    Validate sale comparable records.

    Checks per record:
    - price per SF agrees with price / square feet
    - cap rate lies in [0, cap_rate_max)
    - sale month is a real calendar month
    - area and price were both found
    """

    def __init__(self, price_per_sf_tolerance: float = 0.05, cap_rate_max: float = CAP_RATE_MAX):
        """
        Initialize validator.

        Args:
            price_per_sf_tolerance: Allowed relative gap between a printed
                price per SF and price / square feet (default 5%)
            cap_rate_max: Exclusive upper bound for a cap rate
        """
        self.price_per_sf_tolerance = price_per_sf_tolerance
        self.cap_rate_max = cap_rate_max

    def validate_record(self, record: SaleComparable, index: int = 0) -> List[ValidationResult]:
        """
        Validate a single record.

        Args:
            record: Record to check
            index: Position of the record in the result list

        Returns:
            Failed checks only; empty when the record is clean
        """
        failures = []
        label = f"Record {index + 1} ({record.date} {record.property_name})".strip()

        if record.square_feet <= 0 or record.price <= 0:
            failures.append(ValidationResult(
                success=False,
                message=f"{label}: incomplete numeric columns (SF={record.square_feet}, price={record.price})",
                record_index=index
            ))
        else:
            expected = derive_price_per_sf(record.price, record.square_feet)
            if record.price_per_sf_derived:
                if record.price_per_sf != expected:
                    failures.append(ValidationResult(
                        success=False,
                        message=f"{label}: derived price/SF {record.price_per_sf} != {expected}",
                        record_index=index,
                        expected_price_per_sf=expected,
                        actual_price_per_sf=record.price_per_sf
                    ))
            elif abs(record.price_per_sf - expected) > expected * self.price_per_sf_tolerance:
                failures.append(ValidationResult(
                    success=False,
                    message=(
                        f"{label}: printed price/SF {record.price_per_sf} differs from "
                        f"price / SF = {expected}"
                    ),
                    record_index=index,
                    expected_price_per_sf=expected,
                    actual_price_per_sf=record.price_per_sf
                ))

        if not 0 <= record.cap_rate < self.cap_rate_max:
            failures.append(ValidationResult(
                success=False,
                message=f"{label}: cap rate {record.cap_rate} outside [0, {self.cap_rate_max})",
                record_index=index
            ))

        if parse_sale_month(record.date) is None:
            failures.append(ValidationResult(
                success=False,
                message=f"{label}: sale date '{record.date}' is not a calendar month",
                record_index=index
            ))

        return failures

    def validate(self, records: List[SaleComparable]) -> Tuple[bool, List[str]]:
        """
        Validate every record.

        Args:
            records: Records in output order

        Returns:
            Tuple of (all passed, warning messages)
        """
        logger.info(f"Validating {len(records)} records")

        messages = []
        for index, record in enumerate(records):
            for failure in self.validate_record(record, index):
                logger.warning(failure.message)
                messages.append(failure.message)

        all_passed = not messages
        if all_passed:
            logger.info("✓ Record validation PASSED")
        else:
            logger.warning(f"✗ Record validation found {len(messages)} issues")

        return all_passed, messages
