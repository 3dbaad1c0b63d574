from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterator, List, Union


@dataclass(frozen=True)
class ReqLeaf:
    # Normalized course id ("ACCT*330"). Not checked against the catalog here.
    code: str


@dataclass(frozen=True)
class ReqAnd:
    items: List["Req"]


@dataclass(frozen=True)
class ReqOr:
    items: List["Req"]


Req = Union[ReqLeaf, ReqAnd, ReqOr]


def make_group(kind: type, items: List[Req]) -> Req | None:
    """ReqAnd/ReqOr over items, collapsing a single child to the child itself."""
    if not items:
        return None
    if len(items) == 1:
        return items[0]
    return kind(list(items))


def iter_codes(node: Req | None) -> Iterator[str]:
    if node is None:
        return
    if isinstance(node, ReqLeaf):
        yield node.code
        return
    for child in node.items:
        yield from iter_codes(child)


def req_to_json(node: Req | None) -> Any:
    """
    Display shape used by the detail panel:
      leaf  -> "ACCT*330"
      group -> {"type": "and"|"or", "courses": [...]}
    """
    if node is None:
        return None
    if isinstance(node, ReqLeaf):
        return node.code
    kind = "or" if isinstance(node, ReqOr) else "and"
    return {"type": kind, "courses": [req_to_json(ch) for ch in node.items]}


def req_to_text(node: Req | None) -> str:
    # "ACCT*330 and (FIN*301 or FIN*302)"
    if node is None:
        return ""
    if isinstance(node, ReqLeaf):
        return node.code
    sep = " or " if isinstance(node, ReqOr) else " and "
    parts = []
    for ch in node.items:
        s = req_to_text(ch)
        parts.append(f"({s})" if isinstance(ch, (ReqAnd, ReqOr)) else s)
    return sep.join(parts)
