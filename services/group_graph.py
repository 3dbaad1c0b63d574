"""Course dependency graph for the diagram.

Courses are coalesced into groups (lecture/lab pairs, lettered sequences,
standalone), groups are leveled so every prerequisite sits on a strictly lower
level than its dependents, and the drawn edges are pruned to the nearest level.

Nothing in here raises on bad data: disconnected or cyclic input just ends up
as more isolated groups or looser levels.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Dict, Iterable, List, Optional, Tuple

import networkx as nx

from utils.course_catalog import CourseRecord
from utils.course_codes import extract_course_codes, number_digits, split_code, split_number


logger = logging.getLogger(__name__)

GROUP_SINGLE = "single"
GROUP_COMBINED = "combined"      # lecture + lab ("101" / "101L")
GROUP_SEQUENTIAL = "sequential"  # lettered sequence ("160A" / "160B")


@dataclass(frozen=True)
class CourseGroup:
    id: str
    label: str
    members: Tuple[str, ...]
    kind: str = GROUP_SINGLE

    @property
    def first(self) -> str:
        return self.members[0]

    @property
    def last(self) -> str:
        return self.members[-1]


@dataclass
class GraphLayout:
    groups: Dict[str, CourseGroup]                  # grouping order
    course_to_group: Dict[str, str]
    graph: nx.DiGraph                               # prereq group -> dependent group
    topo_levels: Dict[str, int]
    numeric_levels: Dict[str, int]
    levels: Dict[str, int]                          # final, after enforcement
    level_buckets: Dict[int, List[str]]             # main bands only, ids sorted
    isolated: List[str]
    edges: List[Tuple[str, str]]                    # retained (drawn) group edges
    pruned: List[Tuple[str, str]] = field(default_factory=list)
    cycle_detected: bool = False

    @property
    def adjacency(self) -> Dict[str, List[str]]:
        return {gid: list(self.graph.successors(gid)) for gid in self.graph}

    def group_of(self, course_id: str) -> Optional[CourseGroup]:
        gid = self.course_to_group.get(course_id)
        return self.groups.get(gid) if gid else None

    def level_of(self, course_id: str) -> Optional[int]:
        gid = self.course_to_group.get(course_id)
        return self.levels.get(gid) if gid else None


def _group_id(base: str) -> str:
    return f"group-{base}"


def group_courses(courses: Iterable[CourseRecord]) -> Dict[str, CourseGroup]:
    """
    Greedy grouping, first claim wins:
      1) "SUBJ*101" + "SUBJ*101L"  -> combined
      2) "SUBJ*160A" + "SUBJ*160B" -> sequential
      3) everything else           -> single
    """
    ordered = list(courses)
    known = {c.code for c in ordered}
    grouped: Dict[str, CourseGroup] = {}
    claimed: set[str] = set()

    # 1) lecture/lab pairs
    for c in ordered:
        if c.code in claimed:
            continue
        subject, number = split_code(c.code)
        _, suffix = split_number(number)
        if suffix:
            continue
        digits = number_digits(number)
        lab = f"{subject}*{digits}L"
        if lab in known and lab not in claimed:
            gid = _group_id(f"{subject}-{digits}-combined")
            grouped[gid] = CourseGroup(gid, f"{subject} {digits}", (c.code, lab), GROUP_COMBINED)
            claimed.update((c.code, lab))

    # 2) lettered sequences (A -> B)
    for c in ordered:
        if c.code in claimed:
            continue
        subject, number = split_code(c.code)
        _, suffix = split_number(number)
        if not suffix:
            continue
        digits = number_digits(number)
        nxt = f"{subject}*{digits}{chr(ord(suffix[0]) + 1)}"
        if nxt in known and nxt not in claimed:
            gid = _group_id(f"{subject}-{digits}{suffix}-seq")
            grouped[gid] = CourseGroup(gid, f"{subject} {digits}", (c.code, nxt), GROUP_SEQUENTIAL)
            claimed.update((c.code, nxt))

    # 3) the rest
    for c in ordered:
        if c.code in claimed:
            continue
        gid = _group_id(c.code.replace("*", "-"))
        grouped[gid] = CourseGroup(gid, c.code, (c.code,), GROUP_SINGLE)
        claimed.add(c.code)

    return grouped


def build_group_graph(
    groups: Dict[str, CourseGroup],
    courses_by_id: Dict[str, CourseRecord],
    course_to_group: Dict[str, str],
) -> nx.DiGraph:
    """A -> B when the first member of B names a course inside A. No self loops."""
    g = nx.DiGraph()
    g.add_nodes_from(groups)
    for gid, group in groups.items():
        course = courses_by_id.get(group.first)
        prereqs = extract_course_codes(course.prereq_text) if course else []
        for pid in prereqs:
            pg = course_to_group.get(pid)
            if pg is None or pg == gid:
                continue
            g.add_edge(pg, gid)
    return g


def topological_levels(graph: nx.DiGraph) -> Dict[str, int]:
    """
    One level per topological generation (sources at 0). Groups left over
    (cycles and whatever hangs off them) are appended after the last level
    in discovery order.
    """
    levels: Dict[str, int] = {}
    lvl = 0
    try:
        for generation in nx.topological_generations(graph):
            for gid in generation:
                levels[gid] = lvl
            lvl += 1
    except nx.NetworkXUnfeasible:
        pass

    remainder = [gid for gid in graph if gid not in levels]
    for i, gid in enumerate(remainder):
        levels[gid] = lvl + i
    return levels


def numeric_levels(groups: Dict[str, CourseGroup], courses_by_id: Dict[str, CourseRecord]) -> Dict[str, int]:
    # 100-level -> 0, 200-level -> 1, ... from the lowest member number
    out: Dict[str, int] = {}
    for gid, g in groups.items():
        nums = []
        for m in g.members:
            course = courses_by_id.get(m)
            nums.append((course.numeric if course else 0) or 100)
        out[gid] = max(0, min(nums) // 100 - 1)
    return out


def enforce_levels(levels: Dict[str, int], graph: nx.DiGraph, max_passes: int) -> bool:
    """
    Raise dependents until level(dst) > level(src) on every edge.
    Mutates `levels`. Returns False if it has not settled after max_passes
    (only possible with a cycle).
    """
    edges = list(graph.edges())
    for _ in range(max_passes):
        changed = False
        for src, dst in edges:
            if levels[dst] <= levels[src]:
                levels[dst] = levels[src] + 1
                changed = True
        if not changed:
            return True
    return False


def find_isolated(graph: nx.DiGraph) -> List[str]:
    return list(nx.isolates(graph))


def groups_in_cycles(graph: nx.DiGraph) -> List[str]:
    """Groups sitting on some dependency cycle, in graph order."""
    on_cycle = {gid for cycle in nx.simple_cycles(graph) for gid in cycle}
    return [gid for gid in graph if gid in on_cycle]


def prune_edges(
    graph: nx.DiGraph,
    levels: Dict[str, int],
) -> Tuple[List[Tuple[str, str]], List[Tuple[str, str]]]:
    """Keep only edges into the nearest higher level. Returns (kept, dropped)."""
    kept: List[Tuple[str, str]] = []
    dropped: List[Tuple[str, str]] = []
    for gid in graph:
        deps = list(graph.successors(gid))
        if not deps:
            continue
        src_level = levels[gid]
        higher = [d for d in deps if levels[d] > src_level]
        next_level = min((levels[d] for d in higher), default=None)
        for d in deps:
            if next_level is not None and levels[d] == next_level:
                kept.append((gid, d))
            else:
                dropped.append((gid, d))
    return kept, dropped


def layout_graph(courses: Iterable[CourseRecord], *, sort_courses: bool = True) -> GraphLayout:
    """
    Group, level and prune the dependency graph of a course selection.

    With sort_courses=False the input order drives grouping and cycle
    placement (the result is still deterministic for a fixed order).
    """
    courses_by_id: Dict[str, CourseRecord] = {}
    for c in courses:
        courses_by_id.setdefault(c.code, c)

    ordered = list(courses_by_id.values())
    if sort_courses:
        ordered.sort(key=lambda c: c.code)

    groups = group_courses(ordered)
    course_to_group = {m: gid for gid, g in groups.items() for m in g.members}
    graph = build_group_graph(groups, courses_by_id, course_to_group)

    topo = topological_levels(graph)
    num = numeric_levels(groups, courses_by_id)
    levels = {gid: max(topo[gid], num[gid]) for gid in groups}

    converged = enforce_levels(levels, graph, max_passes=len(groups) + 1)
    if not converged:
        logger.warning(
            "Level enforcement did not settle after %d passes: cycle detected among %d groups",
            len(groups) + 1,
            len(groups),
        )

    isolated = find_isolated(graph)
    isolated_set = set(isolated)

    buckets: Dict[int, List[str]] = {}
    for gid, lv in levels.items():
        if gid in isolated_set:
            continue
        buckets.setdefault(lv, []).append(gid)
    for gids in buckets.values():
        gids.sort()

    kept, dropped = prune_edges(graph, levels)

    logger.debug("groups: %s", {gid: (g.kind, g.members) for gid, g in groups.items()})
    logger.debug("edges: %s", list(graph.edges()))
    logger.debug("topo levels: %s / numeric levels: %s", topo, num)
    logger.debug("final levels: %s", levels)
    logger.debug("isolated: %s", isolated)
    logger.debug("edges kept: %s / pruned: %s", kept, dropped)

    return GraphLayout(
        groups=groups,
        course_to_group=course_to_group,
        graph=graph,
        topo_levels=topo,
        numeric_levels=num,
        levels=levels,
        level_buckets=dict(sorted(buckets.items())),
        isolated=isolated,
        edges=kept,
        pruned=dropped,
        cycle_detected=not converged,
    )
