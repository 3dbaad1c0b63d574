from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from utils.course_catalog import CourseRecord
from utils.course_codes import extract_course_codes


@dataclass
class PrereqNode:
    id: str
    code: str
    title: str | None = None
    children: list["PrereqNode"] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "code": self.code,
            "title": self.title,
            "children": [ch.to_dict() for ch in self.children],
        }


def build_prereq_tree(
    root_id: str,
    catalog: Mapping[str, CourseRecord],
    max_depth: int = 5,
    visited: set[str] | None = None,
) -> PrereqNode | None:
    """
    Expand root_id's prerequisites depth-first into a display tree.

    - unknown root -> None (unknown prereq ids are simply left out)
    - depth exhausted, or root already expanded -> childless leaf
    - `visited` is shared by the whole expansion: a course reached twice
      (cycle or diamond) is expanded once and left out everywhere else,
      self references included
    """
    course = catalog.get(root_id)
    if course is None:
        return None

    node = PrereqNode(id=root_id, code=root_id, title=course.title)
    if visited is None:
        visited = set()

    if max_depth <= 0 or root_id in visited:
        return node
    visited.add(root_id)

    for pid in extract_course_codes(course.prereq_text):
        if pid in visited:
            continue
        child = build_prereq_tree(pid, catalog, max_depth - 1, visited)
        if child is not None:
            node.children.append(child)

    return node
