from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from services.group_graph import CourseGroup, GraphLayout, layout_graph
from utils.course_catalog import CourseRecord


@dataclass(frozen=True)
class LayoutSettings:
    node_width: float = 150
    node_height: float = 54
    horizontal_spacing: float = 160
    vertical_spacing: float = 48
    inner_member_gap: float = -10
    isolated_column_offset: float = 100
    isolated_spacing: float = 24

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "LayoutSettings":
        return cls(
            node_width=config.get("NODE_WIDTH", cls.node_width),
            node_height=config.get("NODE_HEIGHT", cls.node_height),
            horizontal_spacing=config.get("HORIZONTAL_SPACING", cls.horizontal_spacing),
            vertical_spacing=config.get("VERTICAL_SPACING", cls.vertical_spacing),
            inner_member_gap=config.get("INNER_MEMBER_GAP", cls.inner_member_gap),
            isolated_column_offset=config.get("ISOLATED_COLUMN_OFFSET", cls.isolated_column_offset),
            isolated_spacing=config.get("ISOLATED_SPACING", cls.isolated_spacing),
        )


@dataclass(frozen=True)
class DiagramNode:
    id: str
    x: float
    y: float
    title: str
    group_id: str
    group_kind: str
    level: Optional[int]
    isolated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": "custom",
            "position": {"x": self.x, "y": self.y},
            "data": {
                "code": self.id,
                "title": self.title,
                "group": self.group_id,
                "group_kind": self.group_kind,
                "level": self.level,
                "isolated": self.isolated,
            },
        }


@dataclass(frozen=True)
class DiagramEdge:
    id: str
    source: str
    target: str
    kind: str  # "inner" (inside a group) | "prereq"

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "source": self.source, "target": self.target, "kind": self.kind}


def _place_group(
    g: CourseGroup,
    x: float,
    y: float,
    *,
    level: Optional[int],
    isolated: bool,
    titles: Mapping[str, str],
    settings: LayoutSettings,
    nodes: List[DiagramNode],
    edges: List[DiagramEdge],
) -> None:
    # members stacked around the group's anchor, in member order
    n = len(g.members)
    for mi, mid in enumerate(g.members):
        offset = (mi - (n - 1) / 2) * (settings.node_height + settings.inner_member_gap)
        nodes.append(
            DiagramNode(
                id=mid,
                x=x,
                y=y + offset,
                title=titles.get(mid, mid),
                group_id=g.id,
                group_kind=g.kind,
                level=level,
                isolated=isolated,
            )
        )
        if mi < n - 1:
            edges.append(DiagramEdge(f"inner-{mid}", mid, g.members[mi + 1], "inner"))


def emit_positions(
    layout: GraphLayout,
    titles: Optional[Mapping[str, str]] = None,
    settings: Optional[LayoutSettings] = None,
) -> Tuple[List[DiagramNode], List[DiagramEdge]]:
    """
    Levels go left to right (x = band index), groups stack vertically inside a
    band, centered on y = 0. Isolated groups get their own column left of band 0.
    Group-to-group edges run from the last member of the source group to the
    first member of the target group.
    """
    titles = titles or {}
    settings = settings or LayoutSettings()
    nodes: List[DiagramNode] = []
    edges: List[DiagramEdge] = []

    step_x = settings.node_width + settings.horizontal_spacing
    step_y = settings.node_height + settings.vertical_spacing

    for band, (lvl, gids) in enumerate(sorted(layout.level_buckets.items())):
        x = band * step_x
        total_height = len(gids) * step_y - settings.vertical_spacing
        start_y = -total_height / 2
        for idx, gid in enumerate(sorted(gids)):
            _place_group(
                layout.groups[gid],
                x,
                start_y + idx * step_y,
                level=lvl,
                isolated=False,
                titles=titles,
                settings=settings,
                nodes=nodes,
                edges=edges,
            )

    if layout.isolated:
        iso_step = settings.node_height + settings.isolated_spacing
        x = -settings.node_width - settings.isolated_column_offset
        start_y = -(len(layout.isolated) * iso_step - settings.isolated_spacing) / 2
        for idx, gid in enumerate(layout.isolated):
            _place_group(
                layout.groups[gid],
                x,
                start_y + idx * iso_step,
                level=layout.levels.get(gid),
                isolated=True,
                titles=titles,
                settings=settings,
                nodes=nodes,
                edges=edges,
            )

    for src_gid, dst_gid in layout.edges:
        source = layout.groups[src_gid].last
        target = layout.groups[dst_gid].first
        edges.append(DiagramEdge(f"e-{source}-{target}", source, target, "prereq"))

    return nodes, edges


def render_diagram(
    courses: Iterable[CourseRecord],
    settings: Optional[LayoutSettings] = None,
    *,
    sort_courses: bool = True,
) -> Dict[str, Any]:
    """Course selection -> renderer payload {nodes, edges, isolated, cycle_detected}."""
    courses = list(courses)
    if not courses:
        return {"nodes": [], "edges": [], "isolated": [], "cycle_detected": False}

    layout = layout_graph(courses, sort_courses=sort_courses)
    nodes, edges = emit_positions(layout, {c.code: c.title for c in courses}, settings)
    return {
        "nodes": [n.to_dict() for n in nodes],
        "edges": [e.to_dict() for e in edges],
        "isolated": [m for gid in layout.isolated for m in layout.groups[gid].members],
        "cycle_detected": layout.cycle_detected,
    }
