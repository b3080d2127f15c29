# src/energy_tenders/models/tender.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _node(value: Any) -> Dict[str, Any]:
    """
    Returns the value if it is a JSON object, an empty dict otherwise.

    The notice APIs sometimes send null or a list where an object is expected.
    """
    return value if isinstance(value, dict) else {}


def _text(value: Any) -> Optional[str]:
    """
    Text field as a string: numbers become their string form, objects and
    arrays are treated as absent.
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _first_party_buyer(parties: Any) -> Optional[str]:
    if not isinstance(parties, list):
        return None

    for party in parties:
        party = _node(party)
        roles = party.get("roles")
        if isinstance(roles, list) and "buyer" in roles:
            return _text(party.get("name"))
    return None


# =======================
# OCDS release
# =======================

@dataclass
class OcdsRelease:
    """
    One release as returned by Sell2Wales, Find a Tender or Contracts Finder.

    All three APIs expose the OCDS shape (tender / buyer / parties), but not
    every field is filled in, so everything except raw_fields is optional.
    """

    release_id: Optional[str]
    title: Optional[str]
    tender_description: Optional[str]
    release_description: Optional[str]
    buyer_name: Optional[str]
    party_buyer_name: Optional[str]

    # tender.value.amount, numeric in practice but not guaranteed
    amount: Any
    # tender.tenderPeriod.endDate
    end_date: Optional[str]
    # release.date
    date: Optional[str]

    raw_fields: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "OcdsRelease":
        record = _node(record)
        tender = _node(record.get("tender"))
        value = _node(tender.get("value"))
        period = _node(tender.get("tenderPeriod"))

        return cls(
            release_id=record.get("id"),
            title=_text(tender.get("title")),
            tender_description=_text(tender.get("description")),
            release_description=_text(record.get("description")),
            buyer_name=_text(_node(record.get("buyer")).get("name")),
            party_buyer_name=_first_party_buyer(record.get("parties")),
            amount=value.get("amount"),
            end_date=_text(period.get("endDate")),
            date=_text(record.get("date")),
            raw_fields=record,
        )


def releases_from_payload(payload: Any) -> List[OcdsRelease]:
    """
    Extracts the 'releases' array of a response page.

    A payload without releases (or with something else than a list) gives
    an empty list.
    """
    releases = _node(payload).get("releases")
    if not isinstance(releases, list):
        return []
    return [OcdsRelease.from_record(r) for r in releases]
