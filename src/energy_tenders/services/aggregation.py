# src/energy_tenders/services/aggregation.py

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence

from energy_tenders.collectors.fetcher import fetch_source
from energy_tenders.collectors.ocds_client import OcdsClient
from energy_tenders.collectors.sources import ALL_SOURCES, SourceConfig
from energy_tenders.models.normalized import (
    AggregateReport,
    FetchResult,
    NormalizedTender,
    SourceStats,
)
from energy_tenders.services.normalization import sort_by_deadline

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], OcdsClient]
Fetcher = Callable[[SourceConfig, OcdsClient], FetchResult]


def _run_source(source: SourceConfig, client_factory: ClientFactory, fetch: Fetcher) -> FetchResult:
    # One client (and HTTP session) per source, nothing shared between threads
    client = client_factory()
    try:
        return fetch(source, client)
    finally:
        client.close()


def aggregate(
    sources: Sequence[SourceConfig] = ALL_SOURCES,
    client_factory: ClientFactory = OcdsClient,
    *,
    fetch: Fetcher = fetch_source,
    now: Optional[datetime] = None,
    max_workers: Optional[int] = None,
) -> AggregateReport:
    """
    Runs every source, merges their tenders and sorts them by deadline.

    Sources run in parallel threads. A source that raises is recorded as
    {success: false, error} and contributes no tender; the others are not
    affected. Tenders are concatenated in the order of `sources`, whatever
    order the threads finish in.
    """
    stats: Dict[str, SourceStats] = {}
    tenders: List[NormalizedTender] = []

    workers = max_workers or max(len(sources), 1)
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="source") as executor:
        futures: Dict[str, Future] = {
            source.name: executor.submit(_run_source, source, client_factory, fetch)
            for source in sources
        }

        for source in sources:
            try:
                result = futures[source.name].result()
            except Exception as exc:
                logger.exception("%s failed", source.label)
                stats[source.name] = SourceStats.from_error(exc)
                continue

            stats[source.name] = SourceStats.from_result(result)
            tenders.extend(result.records)

    tenders = sort_by_deadline(tenders)

    if now is None:
        now = datetime.now(timezone.utc)

    report = AggregateReport(
        last_updated=now.isoformat(),
        stats=stats,
        tenders=tenders,
    )

    for name, s in stats.items():
        if s.success:
            logger.info("%-16s fetched=%d energy=%d", name, s.total_fetched, s.energy_related)
        else:
            logger.info("%-16s FAILED: %s", name, s.error)

    return report
