from __future__ import annotations

from typing import Any, Mapping

from services.prereq_tree import build_prereq_tree
from services.req_ir import iter_codes, req_to_json, req_to_text
from utils.course_catalog import CourseRecord
from utils.req_parser import parse_req_text


def course_detail(
    course: CourseRecord,
    catalog: Mapping[str, CourseRecord],
    max_depth: int = 5,
) -> dict[str, Any]:
    """
    Payload for the detail panel.

    `prerequisites` keeps every course the text names (even ones missing from the
    catalog); `titles` only covers the ones we know, which is what the panel shows.
    None means "no prerequisites available".
    """
    expr = parse_req_text(course.prereq_text)
    tree = build_prereq_tree(course.code, catalog, max_depth=max_depth)

    titles = {}
    for code in iter_codes(expr):
        ref = catalog.get(code)
        if ref is not None:
            titles[code] = ref.title

    payload = course.to_summary()
    payload.update(
        {
            "description": course.description,
            "prerequisites": req_to_json(expr),
            "prerequisites_summary": req_to_text(expr) or None,
            "prerequisite_tree": tree.to_dict() if tree else None,
            "titles": titles,
        }
    )
    return payload
