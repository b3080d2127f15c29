import json
import os
import stat

import pytest

from energy_tenders.models.normalized import AggregateReport, NormalizedTender, SourceStats
from energy_tenders.persistence.json_store import load_report, save_report


def _report():
    tender = NormalizedTender(
        id="1",
        title="Batterie – Caerdydd",
        description="",
        buyer="Unknown",
        value="£1,000",
        deadline="2025-01-01",
        source="Sell2Wales",
        url="https://example.test/1",
        publish_date="Not specified",
    )
    return AggregateReport(
        last_updated="2025-01-01T00:00:00+00:00",
        stats={
            "sell2Wales": SourceStats(success=True, total_fetched=3, energy_related=1),
            "findATender": SourceStats(success=False, error="boom"),
        },
        tenders=[tender],
    )


def test_save_report_writes_indented_json(tmp_path):
    path = tmp_path / "out" / "tenders-data.json"

    save_report(path, _report())

    text = path.read_text(encoding="utf-8")
    assert text.startswith('{\n  "lastUpdated"')
    assert "£1,000" in text
    doc = json.loads(text)
    assert list(doc) == ["lastUpdated", "stats", "tenders", "totalEnergyTenders"]
    assert doc["tenders"][0]["publishDate"] == "Not specified"
    assert doc["stats"]["findATender"] == {"success": False, "error": "boom"}
    assert doc["totalEnergyTenders"] == 1


def test_save_report_overwrites_previous_file(tmp_path):
    path = tmp_path / "tenders-data.json"
    path.write_text("x" * 100000, encoding="utf-8")

    save_report(path, _report())

    assert load_report(path)["totalEnergyTenders"] == 1
    assert [p.name for p in tmp_path.iterdir()] == ["tenders-data.json"]


@pytest.mark.skipif(os.name == "nt", reason="POSIX file modes")
def test_save_report_keeps_existing_file_mode(tmp_path):
    path = tmp_path / "tenders-data.json"
    path.write_text("{}", encoding="utf-8")
    os.chmod(path, 0o644)

    save_report(path, _report())

    assert stat.S_IMODE(path.stat().st_mode) == 0o644


@pytest.mark.skipif(os.name == "nt", reason="POSIX file modes")
def test_save_report_new_file_follows_umask(tmp_path):
    path = tmp_path / "tenders-data.json"
    previous = os.umask(0o022)
    try:
        save_report(path, _report())
    finally:
        os.umask(previous)

    assert stat.S_IMODE(path.stat().st_mode) == 0o644
