import re

import pytest

from utils.course_codes import (
    extract_course_codes,
    is_course_code,
    normalize_course_code,
    normalize_for_scan,
    number_digits,
    split_number,
)


def test_extracts_star_space_and_joined_forms():
    text = "ACCT*330, FIN 301; (ECON2310)"
    assert extract_course_codes(text) == ["ACCT*330", "FIN*301", "ECON*2310"]


def test_duplicates_keep_first_occurrence_order():
    text = "FIN*301 or ACCT*330 or ACCT 330 and FIN*301"
    assert extract_course_codes(text) == ["FIN*301", "ACCT*330"]


def test_lowercase_and_dashes_are_normalized():
    assert extract_course_codes("math-101 and cis:160a") == ["MATH*101", "CIS*160A"]


def test_slash_alternatives():
    assert normalize_for_scan("CIS*160A/CIS*160B") == "CIS*160A OR CIS*160B"
    assert extract_course_codes("CIS*160A/CIS*160B") == ["CIS*160A", "CIS*160B"]


@pytest.mark.parametrize("value", [None, "", 42, ["ACCT*330"], "Instructor consent required"])
def test_non_strings_and_plain_prose_yield_nothing(value):
    assert extract_course_codes(value) == []


@pytest.mark.parametrize(
    "text",
    [
        "Prerequisite(s): 2.00 credits including (1 of CIS*1300, CIS*1500)",
        "ACCT*330/FIN*301 - with a minimum grade of 60%",
        "MATH 101; MATH*101; math101; MATH*101L",
        "STUDENT MUST HAVE COMPLETED ENGG*150, ENGG*160A or ENGG*160B.",
    ],
)
def test_every_result_is_a_normalized_unique_code(text):
    codes = extract_course_codes(text)
    assert len(codes) == len(set(codes))
    for code in codes:
        assert re.fullmatch(r"[A-Z]{2,6}\*\d{2,4}[A-Z]*", code)
        assert is_course_code(code)


def test_normalize_course_code():
    assert normalize_course_code("acct-330") == "ACCT*330"
    assert normalize_course_code("ACCT 330") == "ACCT*330"
    assert normalize_course_code("nothing") is None
    assert normalize_course_code(None) is None


def test_split_number():
    assert split_number("160A") == (160, "A")
    assert split_number("330") == (330, "")
    assert split_number("") == (0, "")
    assert split_number(None) == (0, "")
    assert number_digits("0100L") == "0100"


def test_is_course_code_uses_the_same_suffix_rule_as_extraction():
    assert is_course_code("ACCT*330")
    assert is_course_code("ENGG*160A")
    assert not is_course_code("ENGG*160AB")
    assert not is_course_code("acct*330")
    assert extract_course_codes("ENGG*160AB") == ["ENGG*160A"]
