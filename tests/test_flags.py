from building_health.flags import build_red_flags, build_timeline
from building_health.models.report import RiskCounts

NO_PROGRAMS = {"aep": False, "vacateOrder": False}
NO_FLOOD = {"inFloodZone": False, "floodZoneType": None, "inHurricaneZone": False, "hurricaneZone": None}


def test_no_flags_for_clean_building():
    assert build_red_flags(RiskCounts(), NO_PROGRAMS, NO_FLOOD) == []


def test_flags_in_display_order():
    counts = RiskCounts(class_c=3, heat_complaints=5, bedbugs=2)
    flood = {"inFloodZone": True, "floodZoneType": "AE", "inHurricaneZone": True, "hurricaneZone": "2"}
    flags = build_red_flags(counts, {"aep": True, "vacateOrder": True}, flood, {"count": 1})

    assert [(f.severity, f.title) for f in flags] == [
        ("critical", "3 Class C Violations"),
        ("critical", "Alternative Enforcement Program"),
        ("critical", "5 Heat Complaints"),
        ("critical", "2 Bedbug Reports"),
        ("warning", "Flood Zone AE"),
        ("info", "Hurricane Zone 2"),
        ("critical", "Vacate Order"),
        ("warning", "Tax Lien Sale"),
    ]
    assert flags[0].description == "Immediately hazardous conditions."


def test_thresholds():
    flags = build_red_flags(RiskCounts(heat_complaints=4, bedbugs=1), NO_PROGRAMS, NO_FLOOD)
    assert flags == []


def test_timeline_sorted_newest_first_and_skips_undated():
    hpd = [
        {"date": "2023-01-10T00:00:00.000", "class": "C", "description": "No heat"},
        {"date": "", "class": "B", "description": "Undated"},
    ]
    dob = [{"date": "20240301", "description": "Failure to maintain"}]
    complaints = [{"date": "2022-12-01", "type": "HEAT/HOT WATER"}]
    sales = [{"date": "2021-05-01T00:00:00.000", "amount": 1300000}]

    events = build_timeline(hpd, dob, complaints, sales)

    assert [(e.source, e.type) for e in events] == [
        ("DOB", "violation"),
        ("HPD C", "violation"),
        ("HPD", "complaint"),
        ("ACRIS", "sale"),
    ]
    assert events[2].description == "HEAT/HOT WATER complaint"
    assert events[3].description == "Sold for $1.3M"


def test_timeline_truncated():
    hpd = [{"date": f"2020-01-{d:02d}", "class": "A", "description": ""} for d in range(1, 29)]
    assert len(build_timeline(hpd * 5, [], [], [])) == 100
