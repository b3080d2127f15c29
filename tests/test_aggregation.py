from datetime import datetime, timezone

from energy_tenders.collectors.sources import ALL_SOURCES, SELL2WALES
from energy_tenders.models.normalized import FetchResult, NormalizedTender
from energy_tenders.services.aggregation import aggregate


class DummyClient:
    instances = []

    def __init__(self):
        self.closed = False
        DummyClient.instances.append(self)

    def close(self):
        self.closed = True


def _tender(tid, source, deadline):
    return NormalizedTender(
        id=tid,
        title="Battery " + tid,
        description="",
        buyer="Unknown",
        value="Not specified",
        deadline=deadline,
        source=source,
        url="",
        publish_date="Not specified",
    )


RESULTS = {
    "sell2Wales": FetchResult(
        True, 10, 2, [_tender("s1", "Sell2Wales", "Not specified"), _tender("s2", "Sell2Wales", "2025-05-01")]
    ),
    "findATender": FetchResult(True, 20, 1, [_tender("f1", "Find a Tender", "2025-01-15T12:00:00Z")]),
    "contractsFinder": FetchResult(
        True, 30, 2, [_tender("c1", "Contracts Finder", "Not specified"), _tender("c2", "Contracts Finder", "2025-02-01")]
    ),
}


def _fake_fetch(failing=()):
    def fetch(source, client):
        if source.name in failing:
            raise RuntimeError(f"{source.name} exploded")
        return RESULTS[source.name]

    return fetch


def test_aggregate_merges_sorts_and_counts():
    now = datetime(2025, 1, 1, 6, 0, tzinfo=timezone.utc)

    report = aggregate(ALL_SOURCES, DummyClient, fetch=_fake_fetch(), now=now)

    assert [t.id for t in report.tenders] == ["f1", "c2", "s2", "s1", "c1"]
    assert report.total_energy_tenders == 5
    assert report.last_updated == "2025-01-01T06:00:00+00:00"

    doc = report.to_dict()
    assert doc["stats"] == {
        "sell2Wales": {"success": True, "totalFetched": 10, "energyRelated": 2},
        "findATender": {"success": True, "totalFetched": 20, "energyRelated": 1},
        "contractsFinder": {"success": True, "totalFetched": 30, "energyRelated": 2},
    }
    assert doc["totalEnergyTenders"] == len(doc["tenders"])


def test_failing_source_does_not_stop_the_others():
    report = aggregate(ALL_SOURCES, DummyClient, fetch=_fake_fetch(failing={"findATender"}))

    doc = report.to_dict()
    assert doc["stats"]["findATender"] == {"success": False, "error": "findATender exploded"}
    assert doc["stats"]["sell2Wales"]["success"] is True
    assert doc["stats"]["contractsFinder"]["success"] is True
    assert report.total_energy_tenders == 4
    assert {t.source for t in report.tenders} == {"Sell2Wales", "Contracts Finder"}


def test_all_sources_failing_still_gives_a_report():
    report = aggregate(ALL_SOURCES, DummyClient, fetch=_fake_fetch(failing={s.name for s in ALL_SOURCES}))

    assert report.tenders == []
    assert report.total_energy_tenders == 0
    assert all(not s.success for s in report.stats.values())


def test_each_client_is_closed():
    DummyClient.instances = []

    aggregate(ALL_SOURCES, DummyClient, fetch=_fake_fetch(failing={"sell2Wales"}))

    assert len(DummyClient.instances) == 3
    assert all(c.closed for c in DummyClient.instances)


def test_single_source():
    report = aggregate([SELL2WALES], DummyClient, fetch=_fake_fetch())

    assert list(report.stats) == ["sell2Wales"]
    assert [t.id for t in report.tenders] == ["s2", "s1"]
