from __future__ import annotations

import re


# 2-4 digits, at most one suffix letter (160A, 101L)
NUMBER_PATTERN = r"\d{2,4}[A-Z]?"

# SUBJ*123, SUBJ 123, SUBJ123
COURSE_RE = re.compile(rf"([A-Z]{{2,6}})\s?\*?\s?({NUMBER_PATTERN})")

FULL_CODE_RE = re.compile(rf"^[A-Z]{{2,6}}\*{NUMBER_PATTERN}$")

_NUMBER_RE = re.compile(r"(\d{2,4})([A-Z]?)")


def normalize_for_scan(text: str) -> str:
    """Flatten punctuation so the course pattern sees 'SUBJ*123' style tokens.

    Slashes read as alternatives ("ACCT*330/FIN*301"), everything else is just noise.
    """
    s = re.sub(r"[,;()]", " ", text)
    s = s.replace("/", " or ")
    s = re.sub(r"[.:\-–—]", " ", s)
    return s.upper()


def extract_course_codes(text) -> list[str]:
    """
    Return every course code mentioned in free-form text, as 'SUBJ*NUMBER'.
    Order of first occurrence is kept, duplicates dropped. Non-strings -> [].
    """
    if not text or not isinstance(text, str):
        return []

    seen: set[str] = set()
    out: list[str] = []
    for subject, number in COURSE_RE.findall(normalize_for_scan(text)):
        code = f"{subject}*{number}"
        if code in seen:
            continue
        seen.add(code)
        out.append(code)
    return out


def normalize_course_code(token) -> str | None:
    # URL-friendly forms: "acct-330", "ACCT 330", "ACCT*330"
    codes = extract_course_codes(str(token or ""))
    return codes[0] if codes else None


def is_course_code(s: str) -> bool:
    return bool(FULL_CODE_RE.match(s or ""))


def split_code(code: str) -> tuple[str, str]:
    subject, _, number = (code or "").partition("*")
    return subject, number


def split_number(number: str | None) -> tuple[int, str]:
    # "160A" -> (160, "A");  unparseable -> (0, "")
    m = _NUMBER_RE.search((number or "").upper())
    if not m:
        return 0, ""
    return int(m.group(1)), m.group(2)


def number_digits(number: str | None) -> str:
    # Digits as written ("0100" stays "0100"), for building companion codes.
    m = _NUMBER_RE.search((number or "").upper())
    return m.group(1) if m else ""
