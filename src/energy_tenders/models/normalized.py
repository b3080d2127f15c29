# src/energy_tenders/models/normalized.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


NOT_SPECIFIED = "Not specified"
NO_TITLE = "No title"
UNKNOWN_BUYER = "Unknown"


@dataclass
class NormalizedTender:
    """
    Common representation of an energy-related notice, whatever its source.
    """

    id: Optional[str]
    title: str
    # Truncated to 300 characters
    description: str
    buyer: str
    # "£1,234,567" or NOT_SPECIFIED
    value: str
    deadline: str

    # Display label of the source ("Sell2Wales", "Find a Tender"...)
    source: str
    url: str
    publish_date: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "buyer": self.buyer,
            "value": self.value,
            "deadline": self.deadline,
            "source": self.source,
            "url": self.url,
            "publishDate": self.publish_date,
        }


@dataclass
class FetchResult:
    """
    What a source fetcher hands back to the aggregator.

    raw_count counts the (deduplicated, for Sell2Wales) records pulled from
    the API, filtered_count the energy-related ones kept in records.
    """

    success: bool
    raw_count: int
    filtered_count: int
    records: List[NormalizedTender] = field(default_factory=list)


@dataclass
class SourceStats:
    success: bool
    total_fetched: Optional[int] = None
    energy_related: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def from_result(cls, result: FetchResult) -> "SourceStats":
        return cls(
            success=True,
            total_fetched=result.raw_count,
            energy_related=result.filtered_count,
        )

    @classmethod
    def from_error(cls, exc: BaseException) -> "SourceStats":
        return cls(success=False, error=str(exc) or exc.__class__.__name__)

    def to_dict(self) -> Dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.error}
        return {
            "success": True,
            "totalFetched": self.total_fetched,
            "energyRelated": self.energy_related,
        }


@dataclass
class AggregateReport:
    """
    The document written to tenders-data.json.
    """

    last_updated: str
    stats: Dict[str, SourceStats]
    tenders: List[NormalizedTender]

    @property
    def total_energy_tenders(self) -> int:
        return len(self.tenders)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lastUpdated": self.last_updated,
            "stats": {name: s.to_dict() for name, s in self.stats.items()},
            "tenders": [t.to_dict() for t in self.tenders],
            "totalEnergyTenders": self.total_energy_tenders,
        }
