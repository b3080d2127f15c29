# src/energy_tenders/collectors/fetcher.py

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from energy_tenders.collectors.ocds_client import OcdsClient
from energy_tenders.collectors.sources import (
    DEDUP_AFTER_FILTER,
    DEDUP_BEFORE_FILTER,
    PageRequest,
    SourceConfig,
)
from energy_tenders.models.normalized import FetchResult
from energy_tenders.models.tender import OcdsRelease, releases_from_payload
from energy_tenders.services.deduplication import deduplicate_by_id
from energy_tenders.services.filtering import is_energy_release
from energy_tenders.services.normalization import normalize_release

logger = logging.getLogger(__name__)


def next_link(payload: Optional[Dict[str, Any]]) -> Optional[str]:
    """
    Returns links.next of a response page, or None when there is none.
    """
    if not isinstance(payload, dict):
        return None
    links = payload.get("links")
    if not isinstance(links, dict):
        return None
    nxt = links.get("next")
    return nxt if isinstance(nxt, str) and nxt else None


# =========================
# Enumeration
# =========================


def collect_grid(source: SourceConfig, client: OcdsClient) -> List[OcdsRelease]:
    """
    One GET per request cell, no link following. A failed cell is skipped.
    """
    collected: List[OcdsRelease] = []
    failures = 0

    for request in source.build_requests():
        outcome = client.fetch(request.url, request.params)
        if not outcome.ok:
            failures += 1
            logger.warning("%s: skipping %s (%s)", source.label, request.params or request.url, outcome.reason)
            continue

        releases = releases_from_payload(outcome.payload)
        logger.debug("%s: %d releases for %s", source.label, len(releases), request.params or request.url)
        collected.extend(releases)

    if failures:
        logger.info("%s: %d request(s) failed and were skipped", source.label, failures)
    return collected


def collect_paginated(source: SourceConfig, client: OcdsClient) -> List[OcdsRelease]:
    """
    Follows links.next from the first request until there is no cursor,
    source.max_records releases are held, or a request fails.

    Whole pages are kept, so the last page may push the count above the cap.
    Releases collected before a failure are kept.
    """
    collected: List[OcdsRelease] = []
    initial = source.build_requests()
    request: Optional[PageRequest] = initial[0] if initial else None
    page = 0

    while request is not None and len(collected) < source.max_records:
        outcome = client.fetch(request.url, request.params)
        if not outcome.ok:
            logger.warning(
                "%s: pagination stopped after %d page(s): %s",
                source.label,
                page,
                outcome.reason,
            )
            break

        page += 1
        releases = releases_from_payload(outcome.payload)
        collected.extend(releases)
        logger.debug("%s: page %d -> %d releases (total %d)", source.label, page, len(releases), len(collected))

        nxt = next_link(outcome.payload)
        request = PageRequest(nxt) if nxt else None

    if request is not None and len(collected) >= source.max_records:
        logger.info("%s: cap of %d releases reached, stopping", source.label, source.max_records)
    return collected


# =========================
# Fetcher
# =========================


def fetch_source(source: SourceConfig, client: OcdsClient) -> FetchResult:
    """
    Fetches one source, keeps energy-related releases and normalizes them.

    - Sell2Wales dedups by id before filtering (raw_count is the unique count)
    - Contracts Finder dedups by id after filtering
    - Find a Tender does not dedup

    Request failures are absorbed; anything else is raised to the caller.
    """
    logger.info("Fetching %s...", source.label)

    if source.paginate:
        releases = collect_paginated(source, client)
    else:
        releases = collect_grid(source, client)

    if source.dedup == DEDUP_BEFORE_FILTER:
        releases = deduplicate_by_id(releases)

    raw_count = len(releases)
    kept = [r for r in releases if is_energy_release(r, source.description_fallback)]

    if source.dedup == DEDUP_AFTER_FILTER:
        kept = deduplicate_by_id(kept)

    records = [normalize_release(r, source) for r in kept]

    logger.info("%s: %d fetched, %d energy-related", source.label, raw_count, len(records))
    return FetchResult(
        success=True,
        raw_count=raw_count,
        filtered_count=len(records),
        records=records,
    )
