from __future__ import annotations
import re
from services.req_ir import Req, ReqLeaf, ReqAnd, ReqOr, make_group
from utils.course_codes import extract_course_codes


PREAMBLE_RE = re.compile(
    r"^(?:students?\s+must\s+have\s+completed\s+|prerequisites?\s*:?\s*|prereqs?\s*:?\s*)",
    re.IGNORECASE,
)

# Everything after a coreq marker is a different requirement; not modelled.
COREQ_RE = re.compile(r"\bco-?req(?:uisite)?s?\b", re.IGNORECASE)

# Grade qualifiers ("with a minimum grade of 60%") at the tail of the text.
QUALIFIER_RES = [
    re.compile(r"\bwith\b[^.]*$", re.IGNORECASE),
    re.compile(r"\ball\s+with\b.*$", re.IGNORECASE),
]

SENTENCE_SPLIT_RE = re.compile(r"[.;\n]+")
OR_SPLIT_RE = re.compile(r"\bor\b", re.IGNORECASE)


def normalize_text(s: str) -> str:
    s = s.strip()
    s = re.sub(r"\s+", " ", s)
    return s


def strip_preamble(s: str) -> str:
    return PREAMBLE_RE.sub("", s, count=1).strip()


def truncate_qualifiers(s: str) -> str:
    s = COREQ_RE.split(s, maxsplit=1)[0].strip()
    for rx in QUALIFIER_RES:
        s = rx.sub("", s).strip()
    return s


def split_sentences(s: str) -> list[str]:
    # Sentence terminators only; commas inside a sentence are course lists.
    return [p.strip() for p in SENTENCE_SPLIT_RE.split(s) if p.strip()]


def split_top(s: str) -> list[str]:
    # OR binds looser than AND, so it is split first.
    return [p.strip() for p in OR_SPLIT_RE.split(s) if p.strip()]


def parse_and_part(part: str) -> Req | None:
    codes = extract_course_codes(part)
    return make_group(ReqAnd, [ReqLeaf(c) for c in codes])


def parse_sentence(sentence: str) -> Req | None:
    if not sentence:
        return None

    if OR_SPLIT_RE.search(sentence):
        items = [parse_and_part(p) for p in split_top(sentence)]
        return make_group(ReqOr, [it for it in items if it is not None])

    return parse_and_part(sentence)


def parse_req_text(text) -> Req | None:
    """
    Parse a free-form prerequisite description into an AND/OR tree.

    Stages: normalize -> strip preamble -> drop coreq/qualifier tails ->
    split sentences -> split each on "or" -> leftover course lists are ANDed.
    Sentences are ANDed together. Returns None when no course is mentioned.

    "A or B and C" parses as OR(A, AND(B, C)).
    """
    if not text or not isinstance(text, str):
        return None

    text = normalize_text(text)
    text = strip_preamble(text)
    text = truncate_qualifiers(text)

    items = [parse_sentence(s) for s in split_sentences(text)]
    return make_group(ReqAnd, [it for it in items if it is not None])
