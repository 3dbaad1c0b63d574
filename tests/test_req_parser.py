import pytest

from services.req_ir import ReqAnd, ReqLeaf, ReqOr, iter_codes, req_to_json, req_to_text
from utils.req_parser import (
    parse_req_text,
    parse_sentence,
    split_sentences,
    split_top,
    strip_preamble,
    truncate_qualifiers,
)


A = ReqLeaf("ACCT*330")
F1 = ReqLeaf("FIN*301")
F2 = ReqLeaf("FIN*302")


def test_single_course_is_a_bare_leaf():
    assert parse_req_text("ACCT*330") == A


def test_and_keeps_order():
    assert parse_req_text("ACCT*330 and FIN*301") == ReqAnd([A, F1])


def test_or_group():
    assert parse_req_text("ACCT*330 or FIN*301") == ReqOr([A, F1])


@pytest.mark.parametrize("value", ["", None, "   ", "Instructor consent", 12])
def test_nothing_to_parse_returns_none(value):
    assert parse_req_text(value) is None


def test_or_binds_looser_than_and():
    assert parse_req_text("ACCT*330 or FIN*301 and FIN*302") == ReqOr([A, ReqAnd([F1, F2])])


def test_comma_list_inside_or_part_is_anded():
    assert parse_req_text("ACCT*330, FIN*301 or FIN*302") == ReqOr([ReqAnd([A, F1]), F2])


def test_sentences_are_anded():
    text = "ACCT*330. FIN*301 or FIN*302"
    assert parse_req_text(text) == ReqAnd([A, ReqOr([F1, F2])])


def test_or_part_without_courses_is_dropped_and_collapsed():
    assert parse_req_text("ACCT*330 or permission of the department") == A


def test_preamble_is_stripped():
    assert strip_preamble("Student must have completed ACCT*330") == "ACCT*330"
    assert strip_preamble("Prerequisite: ACCT*330") == "ACCT*330"
    assert parse_req_text("Students must have completed ACCT*330 or FIN*301") == ReqOr([A, F1])


def test_coreq_tail_is_ignored():
    assert parse_req_text("ACCT*330 Corequisite: FIN*301") == A
    assert parse_req_text("ACCT*330; coreq FIN*301") == A


def test_grade_qualifier_is_ignored():
    # "of 70" would otherwise read as a course code
    assert truncate_qualifiers("ACCT*330 with a minimum grade of 70%") == "ACCT*330"
    assert parse_req_text("ACCT*330 with a minimum grade of 70%") == A


def test_stages():
    assert split_sentences("A.\nB; C") == ["A", "B", "C"]
    assert split_top("ACCT*330 or FIN*301 OR FIN*302") == ["ACCT*330", "FIN*301", "FIN*302"]
    # "or" inside words is not a connective
    assert split_top("major courses") == ["major courses"]
    assert parse_sentence("") is None


def test_requisite_blocks_joined_as_sentences():
    assert parse_req_text("ACCT*330 ; FIN*301 or FIN*302") == ReqAnd([A, ReqOr([F1, F2])])


def test_json_and_text_views():
    expr = parse_req_text("ACCT*330. FIN*301 or FIN*302")
    assert req_to_json(expr) == {
        "type": "and",
        "courses": ["ACCT*330", {"type": "or", "courses": ["FIN*301", "FIN*302"]}],
    }
    assert req_to_text(expr) == "ACCT*330 and (FIN*301 or FIN*302)"
    assert list(iter_codes(expr)) == ["ACCT*330", "FIN*301", "FIN*302"]
    assert req_to_json(None) is None
    assert req_to_json(A) == "ACCT*330"
