import pytest

from mqt.tabs import TabType

TAB_IDS = [
    "overview",
    "performance",
    "extendedHours",
    "valuation",
    "dividends",
    "profitability",
    "incomeStatement",
    "balanceSheet",
    "cashFlow",
    "technicals",
]


def test_all_tabs_in_order():
    assert list(TabType) == [TabType(tab_id) for tab_id in TAB_IDS]
    assert [TabType(tab_id).tab_id() for tab_id in TAB_IDS] == TAB_IDS


@pytest.mark.parametrize(
    "tab, label",
    [
        (TabType.OVERVIEW, "概览"),
        (TabType.EXTENDED_HOURS, "延长时段"),
        (TabType.BALANCE_SHEET, "资产负债表"),
        (TabType.TECHNICALS, "技术指标"),
    ],
)
def test_labels(tab, label):
    assert tab.label() == label


def test_lookup_by_id_round_trip():
    for tab in TabType:
        assert TabType(tab.tab_id()) is tab


def test_labels_are_unique_and_present():
    labels = [TabType(tab_id).label() for tab_id in TAB_IDS]
    assert len(set(labels)) == len(labels) == len(TAB_IDS)
    assert all(labels)


def test_unknown_id_rejected():
    with pytest.raises(ValueError):
        TabType("nonexistent")