# src/energy_tenders/collectors/sources.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, List, Optional

# =======================
# Endpoints
# =======================

SELL2WALES_API_URL = "https://api.sell2wales.gov.wales/v1/Notices"
FIND_A_TENDER_API_URL = "https://www.find-tender.service.gov.uk/api/1.0/ocdsReleasePackages"
CONTRACTS_FINDER_API_URL = (
    "https://www.contractsfinder.service.gov.uk/Published/Notices/OCDS/Search"
    "?order=publishedDate&stage=active"
)

# Notice type codes queried on Sell2Wales
SELL2WALES_NOTICE_TYPES = (1, 2, 3, 7)
SELL2WALES_MONTHS_BACK = 6
# en-GB
SELL2WALES_LOCALE = 2057

MAX_PAGINATED_RECORDS = 2000

DEDUP_BEFORE_FILTER = "before_filter"
DEDUP_AFTER_FILTER = "after_filter"


@dataclass(frozen=True)
class PageRequest:
    url: str
    params: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class SourceConfig:
    """
    Everything that differs from one notice API to another.

    - name : key in the report stats ("sell2Wales"...)
    - label : value written in NormalizedTender.source
    - url_template : public notice page, with an {id} placeholder
    - build_requests : returns the initial requests (24 grid cells for
      Sell2Wales, the search URL for the others)
    - paginate : follow links.next from each response
    - dedup : DEDUP_BEFORE_FILTER, DEDUP_AFTER_FILTER or None
    """

    name: str
    label: str
    url_template: str
    build_requests: Callable[[], List[PageRequest]]
    paginate: bool = False
    max_records: int = MAX_PAGINATED_RECORDS
    dedup: Optional[str] = None
    description_fallback: bool = False
    buyer_from_parties: bool = False

    def notice_url(self, release_id: Any) -> str:
        return self.url_template.format(id="" if release_id is None else release_id)


# =======================
# Request enumerators
# =======================

def month_year(months_ago: int, today: Optional[date] = None) -> str:
    """
    'MM-YYYY' for the calendar month `months_ago` months before today.
    """
    if today is None:
        today = date.today()

    index = today.year * 12 + (today.month - 1) - months_ago
    year, month = divmod(index, 12)
    return f"{month + 1:02d}-{year}"


def sell2wales_requests(today: Optional[date] = None) -> List[PageRequest]:
    """
    6 trailing months x 4 notice types = 24 requests, no pagination.
    """
    cells: List[PageRequest] = []
    for months_ago in range(SELL2WALES_MONTHS_BACK):
        date_from = month_year(months_ago, today)
        for notice_type in SELL2WALES_NOTICE_TYPES:
            cells.append(
                PageRequest(
                    SELL2WALES_API_URL,
                    {
                        "dateFrom": date_from,
                        "noticeType": notice_type,
                        "outputType": 0,
                        "locale": SELL2WALES_LOCALE,
                    },
                )
            )
    return cells


def find_a_tender_requests() -> List[PageRequest]:
    return [PageRequest(FIND_A_TENDER_API_URL)]


def contracts_finder_requests() -> List[PageRequest]:
    return [PageRequest(CONTRACTS_FINDER_API_URL)]


# =======================
# Sources
# =======================

SELL2WALES = SourceConfig(
    name="sell2Wales",
    label="Sell2Wales",
    url_template="https://www.sell2wales.gov.wales/search/show/search_view.aspx?ID={id}",
    build_requests=sell2wales_requests,
    dedup=DEDUP_BEFORE_FILTER,
)

# Find a Tender pages are assumed unique, no dedup.
FIND_A_TENDER = SourceConfig(
    name="findATender",
    label="Find a Tender",
    url_template="https://www.find-tender.service.gov.uk/Notice/{id}",
    build_requests=find_a_tender_requests,
    paginate=True,
    description_fallback=True,
    buyer_from_parties=True,
)

CONTRACTS_FINDER = SourceConfig(
    name="contractsFinder",
    label="Contracts Finder",
    url_template="https://www.contractsfinder.service.gov.uk/Notice/{id}",
    build_requests=contracts_finder_requests,
    paginate=True,
    dedup=DEDUP_AFTER_FILTER,
    description_fallback=True,
)

ALL_SOURCES: List[SourceConfig] = [SELL2WALES, FIND_A_TENDER, CONTRACTS_FINDER]
