from building_health.normalizers.histograms import count_by, count_by_year, percentage_breakdown, top_counts


def test_count_by_skips_empty_keys():
    records = [{"t": "a"}, {"t": "b"}, {"t": "a"}, {"t": ""}, {}]
    assert count_by(records, lambda r: r.get("t")) == {"a": 2, "b": 1}


def test_count_by_year_uses_first_present_field():
    records = [
        {"inspectiondate": "2023-01-05T00:00:00.000"},
        {"novissueddate": "2022-03-01"},
        {"inspectiondate": "2023-07-01", "novissueddate": "2020-01-01"},
        {},
    ]
    assert count_by_year(records, "inspectiondate", "novissueddate") == {"2023": 2, "2022": 1}


def test_top_counts_orders_by_count():
    assert top_counts({"a": 1, "b": 3, "c": 2}, 2) == [
        {"type": "b", "count": 3},
        {"type": "c", "count": 2},
    ]


def test_percentage_breakdown_rounds_half_up():
    result = percentage_breakdown({"Heat/Hot Water": 1, "Pests": 1, "Mold": 6}, 8)
    assert result[0] == {"category": "Mold", "count": 6, "pct": 75}
    # 1/8 = 12.5% rounds up
    assert [r["pct"] for r in result[1:]] == [13, 13]


def test_percentage_breakdown_empty():
    assert percentage_breakdown({}, 8) == []
