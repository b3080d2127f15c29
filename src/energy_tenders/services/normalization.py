# src/energy_tenders/services/normalization.py

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any, List, Optional

from energy_tenders.collectors.sources import SourceConfig
from energy_tenders.models.normalized import (
    NOT_SPECIFIED,
    NO_TITLE,
    UNKNOWN_BUYER,
    NormalizedTender,
)
from energy_tenders.models.tender import OcdsRelease
from energy_tenders.services.filtering import release_description

logger = logging.getLogger(__name__)

DESCRIPTION_MAX_LENGTH = 300
CURRENCY_SYMBOL = "£"


# =========================
# Helpers
# =========================


def format_value(amount: Any) -> str:
    """
    Formats tender.value.amount as a pound string with thousands separators.

    - 1234567   -> "£1,234,567"
    - 1234.5    -> "£1,234.5" (at most 3 decimals, trailing zeros dropped)
    - None / 0  -> "Not specified"

    A non-numeric amount (some feeds send strings) is prefixed as is.
    """
    if amount is None or isinstance(amount, bool) or amount == "" or amount == 0:
        return NOT_SPECIFIED

    if isinstance(amount, (int, float)):
        if isinstance(amount, float):
            if not math.isfinite(amount):
                return NOT_SPECIFIED
            if amount.is_integer():
                amount = int(amount)
        if isinstance(amount, int):
            return f"{CURRENCY_SYMBOL}{amount:,}"
        formatted = f"{amount:,.3f}".rstrip("0").rstrip(".")
        return f"{CURRENCY_SYMBOL}{formatted}"

    return f"{CURRENCY_SYMBOL}{amount}"


def parse_deadline(value: Optional[str]) -> Optional[datetime]:
    """
    Parses an ISO-8601 deadline ('2025-03-01', '2025-03-01T12:00:00Z',
    '2025-03-01T12:00:00+01:00'...). Naive values are taken as UTC.

    Returns None for the placeholder or anything we cannot read.
    """
    if not value or not isinstance(value, str) or value == NOT_SPECIFIED:
        return None

    try:
        dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Unreadable deadline: %s", value)
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


# =========================
# Converter
# =========================


def normalize_release(release: OcdsRelease, source: SourceConfig) -> NormalizedTender:
    """
    Projects an OCDS release onto the common NormalizedTender shape.
    """
    description = release_description(release, source.description_fallback)

    buyer = release.buyer_name
    if not buyer and source.buyer_from_parties:
        buyer = release.party_buyer_name

    return NormalizedTender(
        id=release.release_id,
        title=release.title or NO_TITLE,
        description=description[:DESCRIPTION_MAX_LENGTH],
        buyer=buyer or UNKNOWN_BUYER,
        value=format_value(release.amount),
        deadline=release.end_date or NOT_SPECIFIED,
        source=source.label,
        url=source.notice_url(release.release_id),
        publish_date=release.date or NOT_SPECIFIED,
    )


# =========================
# Ordering
# =========================


def sort_by_deadline(tenders: List[NormalizedTender]) -> List[NormalizedTender]:
    """
    Earliest deadline first.

    Tenders without a readable deadline ("Not specified" included) go to the
    end; sorted() is stable so they keep their incoming order.
    """
    def key(t: NormalizedTender):
        dt = parse_deadline(t.deadline)
        if dt is None:
            return (1, 0.0)
        return (0, dt.timestamp())

    return sorted(tenders, key=key)
