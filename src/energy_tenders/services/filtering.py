# src/energy_tenders/services/filtering.py

from __future__ import annotations

from typing import List, Optional

from energy_tenders.models.tender import OcdsRelease

# Battery / storage / renewables vocabulary. Matching is a plain substring
# test on lower-cased text: "lithium-ion" matches "lithium", and so does a
# buyer called "Inverter Solutions Ltd" if it shows up in the description.
ENERGY_KEYWORDS: List[str] = [
    "battery",
    "batteries",
    "energy storage",
    "bess",
    "powerwall",
    "battery energy storage",
    "solar battery",
    "home battery",
    "residential energy storage",
    "lithium",
    "inverter",
    "solar pv",
    "photovoltaic",
    "renewable energy",
    "ev charging",
    "electric vehicle charging",
    "microgrid",
]


def matches(text: Optional[str]) -> bool:
    """
    True if any energy keyword appears in the text (case-insensitive).
    """
    if not text:
        return False

    lower = text.lower()
    return any(kw in lower for kw in ENERGY_KEYWORDS)


def release_description(release: OcdsRelease, use_release_description: bool = False) -> str:
    """
    Description used for matching and display.

    Find a Tender and Contracts Finder sometimes leave tender.description
    empty and put the text at release level; Sell2Wales does not.
    """
    if use_release_description:
        return release.tender_description or release.release_description or ""
    return release.tender_description or ""


def is_energy_release(release: OcdsRelease, use_release_description: bool = False) -> bool:
    """
    Applies the keyword matcher to "title description".
    """
    text = (release.title or "") + " " + release_description(release, use_release_description)
    return matches(text)
