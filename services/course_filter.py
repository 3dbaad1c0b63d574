from __future__ import annotations

import re
from typing import Iterable, Mapping

from utils.course_catalog import CourseRecord
from utils.course_codes import extract_course_codes


SEMESTERS = ("Fall", "Winter", "Spring", "Summer")


def parse_semesters(values: Iterable[str]) -> list[str]:
    """
    'fall', 'Summer' -> ['Fall', 'Summer'].  'All' (or nothing) -> [] meaning no filter.
    Raises ValueError on an unknown name (HTTP layer turns it into a 400).
    """
    out: list[str] = []
    for v in values:
        for token in str(v or "").split(","):
            t = token.strip().capitalize()
            if not t or t == "All":
                continue
            if t not in SEMESTERS:
                raise ValueError(f"Unknown semester {token.strip()!r}")
            if t not in out:
                out.append(t)
    return out


def offered_in(course: CourseRecord, semesters: list[str]) -> bool:
    # No filter, or no term information -> keep the course.
    if not semesters:
        return True
    terms = course.terms_offered or ""
    if not any(re.search(rf"\b{s}\b", terms, re.IGNORECASE) for s in SEMESTERS):
        return True
    return any(re.search(rf"\b{s}\b", terms, re.IGNORECASE) for s in semesters)


def select_subject_courses(
    catalog: Mapping[str, CourseRecord],
    subject: str,
    *,
    max_number: int = 500,
    semesters: list[str] | None = None,
) -> list[CourseRecord]:
    """
    Courses of one subject (numeric part <= max_number) plus, transitively, every
    prerequisite found in the catalog under the same cap. Empty subject -> [].

    Order: subject courses in catalog order, each followed depth-first by its
    newly reached prerequisites.
    """
    subj = (subject or "").strip().upper()
    if not subj:
        return []

    initial = [
        c for c in catalog.values()
        if c.subject.upper() == subj and c.numeric <= max_number and offered_in(c, semesters or [])
    ]

    expanded: dict[str, CourseRecord] = {}

    def add_with_prereqs(course: CourseRecord) -> None:
        stack = [course]
        while stack:
            c = stack.pop()
            if c.code in expanded or c.numeric > max_number:
                continue
            expanded[c.code] = c
            prereqs = [catalog[pid] for pid in extract_course_codes(c.prereq_text) if pid in catalog]
            # reversed so the first-mentioned prereq is visited first
            stack.extend(reversed(prereqs))

    for c in initial:
        add_with_prereqs(c)

    return list(expanded.values())
