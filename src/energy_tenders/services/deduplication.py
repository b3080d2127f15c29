# src/energy_tenders/services/deduplication.py

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from energy_tenders.models.tender import OcdsRelease

logger = logging.getLogger(__name__)


def deduplicate_by_id(releases: List[OcdsRelease]) -> List[OcdsRelease]:
    """
    Strict dedup on the release id, inside a single source.

    - the last release seen for an id wins
    - the kept release takes the position of the first occurrence of its id

    Releases without an id share the same (None) key, so only one of them
    survives.
    """
    by_id: Dict[Optional[str], OcdsRelease] = {}
    for release in releases:
        by_id[release.release_id] = release

    unique = list(by_id.values())
    if len(unique) != len(releases):
        logger.info("Dedup by id: %d -> %d", len(releases), len(unique))
    return unique
