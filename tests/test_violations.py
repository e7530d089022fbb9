from building_health.normalizers.violations import (
    build_violations_section,
    hpd_by_year,
    is_open_dob,
    is_open_ecb,
    is_open_hpd,
    merge_recent,
)


def test_hpd_open_rule():
    assert is_open_hpd({"currentstatus": "VIOLATION OPEN", "currentstatusdate": "2024-01-01"})
    assert is_open_hpd({"currentstatus": "NOV SENT OUT"})
    assert not is_open_hpd({"currentstatus": "VIOLATION CLOSED", "currentstatusdate": "2024-01-01"})


def test_dob_open_rule():
    assert is_open_dob({"issue_date": "20230101"})
    assert not is_open_dob({"issue_date": "20230101", "disposition_date": "20230301"})
    assert not is_open_dob({})


def test_ecb_open_rule():
    assert is_open_ecb({"ecb_violation_status": "ACTIVE"})
    assert not is_open_ecb({"ecb_violation_status": "RESOLVE"})
    assert not is_open_ecb({"ecb_violation_status": "DISMISSED"})


def test_hpd_by_year_starts_in_2010():
    violations = [
        {"inspectiondate": "2009-05-01", "class": "C"},
        {"inspectiondate": "2015-05-01", "class": "C"},
        {"inspectiondate": "2015-06-01", "class": "B"},
        {"novissueddate": "2016-01-01", "class": "I"},
    ]
    assert hpd_by_year(violations) == {
        "2015": {"total": 2, "a": 0, "b": 1, "c": 1},
        "2016": {"total": 1, "a": 0, "b": 0, "c": 0},
    }


def test_violations_section_counts_open_by_class():
    hpd = [
        {"violationid": "1", "class": "C", "currentstatus": "VIOLATION OPEN", "currentstatusdate": "2024-01-01",
         "inspectiondate": "2024-01-01", "novdescription": "No heat"},
        {"violationid": "2", "class": "C", "currentstatus": "VIOLATION OPEN", "currentstatusdate": "2024-01-02",
         "inspectiondate": "2024-01-02", "novdescription": "Mice"},
        {"violationid": "3", "class": "B", "currentstatus": "VIOLATION OPEN", "currentstatusdate": "2023-01-02",
         "inspectiondate": "2023-01-02", "novdescription": "Leak"},
        {"violationid": "4", "class": "A", "currentstatus": "VIOLATION CLOSED", "currentstatusdate": "2022-01-02",
         "inspectiondate": "2022-01-02", "novdescription": "Paint"},
    ]
    dob = [{"issue_date": "20240215", "description": "Elevator"}]
    section = build_violations_section(hpd, dob, [{"penalty_balance_due": "250.5"}], [{}, {}])

    assert section["hpd"]["total"] == 4
    assert section["hpd"]["open"] == 3
    assert (section["hpd"]["classA"], section["hpd"]["classB"], section["hpd"]["classC"]) == (0, 1, 2)
    assert section["hpd"]["byCategory"]["Heat/Hot Water"] == 1
    assert section["dob"] == {"total": 1, "open": 1, "byYear": {"2024": 1}}
    assert section["ecb"]["penaltiesOwed"] == 250.5
    assert section["safety"] == {"total": 2}
    assert [v["id"] for v in section["recent"]][:2] == ["dob-0", "2"]


def test_recent_ids_fall_back_to_source_and_index():
    section = build_violations_section([{"inspectiondate": "2024-01-01"}], [], [], [])
    assert section["recent"][0]["id"] == "hpd-0"
    assert section["recent"][0]["description"] == "No description"


def test_merge_recent_sorts_by_date_and_limits():
    merged = merge_recent(
        [{"date": "2020-01-01"}, {"date": ""}],
        [{"date": "2024-01-01"}],
        limit=2,
    )
    assert [m["date"] for m in merged] == ["2024-01-01", "2020-01-01"]
