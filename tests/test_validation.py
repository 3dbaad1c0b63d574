from services.validation import catalog_report, report_hints


def test_report_on_a_messy_catalog(make_catalog, make_course):
    catalog = make_catalog(
        make_course("MATH*101"),
        make_course("MATH*102", "MATH*101 or STAT*999"),
        make_course("MATH*103", "STAT*999 and MATH*103"),
        make_course("MATH*104", "Instructor consent"),
        make_course("CYC*101", "CYC*102"),
        make_course("CYC*102", "CYC*101"),
    )
    report = catalog_report(catalog)

    assert report["courses"] == 6
    assert report["with_prereq_text"] == 5
    assert report["unparseable"] == ["MATH*104"]
    assert report["self_references"] == ["MATH*103"]
    assert report["unresolved"] == [{"code": "STAT*999", "count": 2, "example": "MATH*102 - MATH*102 title"}]
    assert report["unresolved_total"] == 2
    assert report["cycles"] == {"CYC": ["group-CYC-101", "group-CYC-102"]}

    hints = report_hints(report)
    assert any("names no course code" in h for h in hints)
    assert any("missing from the catalog" in h for h in hints)
    assert any('"MATH*103" lists itself' in h for h in hints)
    assert any(h.startswith("CYC: prerequisite cycle") for h in hints)


def test_clean_catalog_has_no_hints(make_catalog, make_course):
    catalog = make_catalog(make_course("MATH*101"), make_course("MATH*102", "MATH*101"))
    report = catalog_report(catalog)
    assert report["cycles"] == {}
    assert report_hints(report) == []


def test_empty_catalog_hint():
    assert report_hints(catalog_report({})) == [
        "The catalog is empty. Export course data into the catalog folder first."
    ]
