# services/validation.py

from __future__ import annotations
from collections import Counter
from typing import Any, Dict, List, Mapping

from services.group_graph import groups_in_cycles, layout_graph
from utils.course_catalog import CourseRecord
from utils.course_codes import extract_course_codes
from utils.req_parser import parse_req_text


def catalog_report(catalog: Mapping[str, CourseRecord], top: int = 20) -> Dict[str, Any]:
    """
    Readable diagnostics for a loaded catalog. Nothing here is an error for the
    diagram itself (unknown refs are dropped, cycles are broken); it shows
    where the scraped text didn't parse the way you'd expect.

    Keys:
      - courses / with_prereq_text
      - unparseable: codes whose prereq text names no course at all
      - self_references: codes whose prereq text names the course itself
      - unresolved: [{"code", "count", "example"}] most common first
      - cycles: groups whose levels never settled, per subject
    """
    with_text = 0
    unparseable: List[str] = []
    self_refs: List[str] = []
    unresolved = Counter()
    unresolved_examples: Dict[str, str] = {}

    for c in catalog.values():
        if not c.prereq_text:
            continue
        with_text += 1

        if parse_req_text(c.prereq_text) is None:
            unparseable.append(c.code)
            continue

        for pid in extract_course_codes(c.prereq_text):
            if pid == c.code:
                self_refs.append(c.code)
            elif pid not in catalog:
                unresolved[pid] += 1
                unresolved_examples.setdefault(pid, f"{c.code} - {c.title}")

    cycles: Dict[str, List[str]] = {}
    by_subject: Dict[str, List[CourseRecord]] = {}
    for c in catalog.values():
        by_subject.setdefault(c.subject, []).append(c)
    for subject, courses in sorted(by_subject.items()):
        layout = layout_graph(courses)
        if layout.cycle_detected:
            cycles[subject] = groups_in_cycles(layout.graph)

    return {
        "courses": len(catalog),
        "with_prereq_text": with_text,
        "unparseable": sorted(unparseable),
        "self_references": sorted(set(self_refs)),
        "unresolved": [
            {"code": code, "count": cnt, "example": unresolved_examples.get(code, "")}
            for code, cnt in unresolved.most_common(top)
        ],
        "unresolved_total": sum(unresolved.values()),
        "cycles": cycles,
    }


def report_hints(report: Mapping[str, Any]) -> List[str]:
    """Turn a catalog_report() into short human hints. Empty list => nothing odd."""
    hints: List[str] = []

    if not report.get("courses"):
        hints.append("The catalog is empty. Export course data into the catalog folder first.")
        return hints

    n_unparseable = len(report.get("unparseable") or [])
    if n_unparseable:
        hints.append(f"{n_unparseable} course(s) have prerequisite text that names no course code.")

    if report.get("unresolved_total"):
        hints.append(
            f"{report['unresolved_total']} prerequisite reference(s) point at courses missing from the catalog; "
            "they are left out of trees and diagrams."
        )

    for code in report.get("self_references") or []:
        hints.append(f'Course "{code}" lists itself as a prerequisite.')

    for subject, gids in (report.get("cycles") or {}).items():
        hints.append(f"{subject}: prerequisite cycle between {', '.join(gids)}; levels are approximate.")

    return hints
