from datetime import date

from energy_tenders.collectors.sources import (
    ALL_SOURCES,
    SELL2WALES,
    SELL2WALES_API_URL,
    month_year,
    sell2wales_requests,
)


def test_month_year():
    assert month_year(0, date(2025, 3, 31)) == "03-2025"
    assert month_year(2, date(2025, 3, 31)) == "01-2025"
    assert month_year(3, date(2025, 3, 31)) == "12-2024"
    assert month_year(14, date(2025, 3, 1)) == "01-2024"


def test_sell2wales_grid_has_24_cells():
    cells = sell2wales_requests(date(2025, 2, 15))

    assert len(cells) == 24
    assert {c.url for c in cells} == {SELL2WALES_API_URL}
    assert [c.params["dateFrom"] for c in cells[::4]] == [
        "02-2025",
        "01-2025",
        "12-2024",
        "11-2024",
        "10-2024",
        "09-2024",
    ]
    assert [c.params["noticeType"] for c in cells[:4]] == [1, 2, 3, 7]
    assert all(c.params["outputType"] == 0 and c.params["locale"] == 2057 for c in cells)


def test_notice_url():
    assert SELL2WALES.notice_url("ABC123").endswith("search_view.aspx?ID=ABC123")


def test_source_names_match_report_keys():
    assert [s.name for s in ALL_SOURCES] == ["sell2Wales", "findATender", "contractsFinder"]
