import json

import pytest

from app import create_app
from utils.course_catalog import CourseRecord
from utils.course_codes import split_code


RAW_CATALOG = {
    "MATH*101": {"Title": "Calculus I", "CreditsCeusDisplay": "0.50", "TermsOffered": "Fall"},
    "MATH*102": {
        "Title": "Calculus II",
        "CourseRequisites": {"DisplayText": "MATH*101"},
        "TermsOffered": "Winter",
    },
    "MATH*103": {
        "Title": "Calculus III",
        "CourseRequisites": [{"DisplayText": "MATH*101 or MATH*102"}],
        "TermsOffered": "Fall, Winter",
    },
    "PHYS*110": {
        "Title": "Physics for Engineers",
        "CourseRequisites": {"DisplayText": "Prerequisite: MATH*101 and STAT*999"},
    },
    "ART*100": {"Title": "Drawing"},
}


def _make_course(code, prereq=None, title=None, terms="All Years"):
    subject, number = split_code(code)
    if isinstance(prereq, str):
        texts = (prereq,) if prereq else ()
    else:
        texts = tuple(prereq or ())
    return CourseRecord(
        code=code,
        subject=subject,
        number=number,
        title=title or f"{code} title",
        prereq_texts=texts,
        terms_offered=terms,
    )


@pytest.fixture
def make_course():
    return _make_course


@pytest.fixture
def make_catalog():
    def _make(*courses):
        return {c.code: c for c in courses}
    return _make


@pytest.fixture
def math_chain():
    # MATH*101 <- MATH*102 <- MATH*103 (103 also lists 101)
    return [
        _make_course("MATH*101"),
        _make_course("MATH*102", "MATH*101"),
        _make_course("MATH*103", "MATH*101 or MATH*102"),
    ]


@pytest.fixture
def catalog_dir(tmp_path):
    d = tmp_path / "catalog"
    d.mkdir()
    (d / "course_data.json").write_text(json.dumps(RAW_CATALOG), encoding="utf-8")
    return d


@pytest.fixture
def app(catalog_dir):
    app = create_app({"TESTING": True, "CATALOG_DIR": str(catalog_dir)})
    yield app


@pytest.fixture
def client(app):
    return app.test_client()
