from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import csv
import json
import logging
import re
import pandas as pd

from utils.course_codes import normalize_course_code, split_code, split_number


logger = logging.getLogger(__name__)

DEFAULT_TERMS = "All Years"


# Read-only view of one catalog entry. The raw export has many more fields;
# only what the diagram/detail panel needs is kept.
@dataclass(frozen=True)
class CourseRecord:
    code: str                       # "ACCT*330"
    subject: str
    number: str                     # "330", "160A"
    title: str
    description: str | None = None
    credits: str | None = None      # display value ("0.50", "3")
    prereq_texts: tuple[str, ...] = ()
    terms_offered: str = DEFAULT_TERMS

    @property
    def prereq_text(self) -> str:
        # Several requisite blocks read as separate sentences.
        return " ; ".join(self.prereq_texts)

    @property
    def numeric(self) -> int:
        return split_number(self.number)[0]

    @property
    def suffix(self) -> str:
        return split_number(self.number)[1]

    def to_summary(self) -> dict:
        return {
            "id": self.code,
            "code": self.code,
            "subject": self.subject,
            "number": self.number,
            "title": self.title,
            "credits": self.credits,
            "terms_offered": self.terms_offered,
            "prerequisites_text": self.prereq_text or None,
        }


def normalize_name_key(s) -> str:
    s = str(s or "").strip()
    s = re.sub(r"\s+", " ", s)
    return s


def _first_text(raw: dict, *keys: str) -> str | None:
    for k in keys:
        v = raw.get(k)
        if v is None:
            continue
        s = normalize_name_key(v)
        if s:
            return s
    return None


def _requisite_texts(raw: dict) -> tuple[str, ...]:
    # CourseRequisites is either one {"DisplayText": ...} or a list of them
    reqs = raw.get("CourseRequisites")
    if isinstance(reqs, dict):
        reqs = [reqs]
    if not isinstance(reqs, list):
        return ()

    out: list[str] = []
    for r in reqs:
        if not isinstance(r, dict):
            continue
        text = normalize_name_key(r.get("DisplayText"))
        if text:
            out.append(text)
    return tuple(out)


def course_from_raw(key: str, raw: dict) -> CourseRecord | None:
    """Adapt one scraped registration-site record (keyed like 'ACCT*330')."""
    if not isinstance(raw, dict):
        return None

    code = normalize_course_code(key) or normalize_course_code(
        f"{raw.get('SubjectCode', '')}*{raw.get('Number', '')}"
    )
    if not code:
        return None

    key_subject, key_number = split_code(code)
    subject = _first_text(raw, "SubjectCode") or key_subject
    number = _first_text(raw, "Number") or key_number

    return CourseRecord(
        code=code,
        subject=subject.upper(),
        number=number.upper(),
        title=_first_text(raw, "Title", "FullTitleDisplay", "CourseTitleDisplay") or code,
        description=_first_text(raw, "Description", "DescriptionDisplay"),
        credits=_first_text(raw, "CreditsCeusDisplay", "MinimumCredits", "CreditsDisplay"),
        prereq_texts=_requisite_texts(raw),
        terms_offered=_first_text(raw, "TermsOffered", "TermsAndSections") or DEFAULT_TERMS,
    )


def courses_from_mapping(data: dict) -> list[CourseRecord]:
    items: list[CourseRecord] = []
    for key, raw in (data or {}).items():
        rec = course_from_raw(str(key), raw)
        if rec is None:
            logger.debug("Skipping catalog entry %r: not a course record", key)
            continue
        items.append(rec)
    return items


def load_catalog(directory: str) -> dict[str, CourseRecord]:
    """
    Load every export in a directory into {code: CourseRecord}.

    Files are read in name order; a later file overrides earlier ones per course
    (same as the extension merging scraping sessions). Unreadable files are skipped.
    """
    p = Path(directory)
    if not p.exists() or not p.is_dir():
        logger.warning("Catalog directory %s not found; catalog is empty", p)
        return {}

    loaders = {
        ".json": _load_json_catalog,
        ".csv": _load_csv_catalog,
        ".xlsx": _load_xlsx_catalog,
    }

    by_code: dict[str, CourseRecord] = {}
    for f in sorted(p.iterdir()):
        loader = loaders.get(f.suffix.lower())
        if loader is None or not f.is_file():
            continue
        try:
            items = loader(f)
        except Exception as e:
            logger.warning("[catalog] Skipping %s: %s", f.name, e)
            continue
        for c in items:
            by_code[c.code] = c

    logger.info("Loaded %d courses from %s", len(by_code), p)
    return by_code


def _load_json_catalog(f: Path) -> list[CourseRecord]:
    data = json.loads(f.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("expected an object keyed by course id")
    return courses_from_mapping(data)


def _row_to_raw(row: dict) -> dict:
    # Tabular exports -> the same shape as the extension's records
    return {
        "Title": row.get("title"),
        "Description": row.get("description"),
        "CreditsCeusDisplay": row.get("credits"),
        "CourseRequisites": {"DisplayText": row.get("prerequisites")},
        "TermsOffered": row.get("terms_offered"),
    }


def _load_csv_catalog(f: Path) -> list[CourseRecord]:
    items: list[CourseRecord] = []
    with f.open(newline="", encoding="utf-8") as fh:
        reader = csv.DictReader(fh)
        if reader.fieldnames:
            reader.fieldnames = [fn.strip().lower() for fn in reader.fieldnames]
        for row in reader:
            code = (row.get("code") or "").strip()
            if not code:
                continue
            rec = course_from_raw(code, _row_to_raw(row))
            if rec is not None:
                items.append(rec)
    return items


def _load_xlsx_catalog(f: Path) -> list[CourseRecord]:
    df = pd.read_excel(f)
    df.columns = [str(c).strip().lower() for c in df.columns]
    items: list[CourseRecord] = []

    def get_text(r, col: str) -> str | None:
        v = r.get(col)
        if v is None or (isinstance(v, float) and pd.isna(v)):
            return None
        s = normalize_name_key(v)
        return s if s else None

    for _, r in df.iterrows():
        code = get_text(r, "code")
        if not code:
            continue
        row = {col: get_text(r, col) for col in ("title", "description", "credits", "prerequisites", "terms_offered")}
        rec = course_from_raw(code, _row_to_raw(row))
        if rec is not None:
            items.append(rec)

    return items


def list_subjects(catalog: dict[str, CourseRecord]) -> list[str]:
    return sorted({c.subject for c in catalog.values() if c.subject})


def search_courses(catalog: dict[str, CourseRecord], query: str, subject: str | None = None) -> list[CourseRecord]:
    q = normalize_name_key(query).lower()
    subj = (subject or "").strip().upper()
    out = []
    for c in catalog.values():
        if subj and c.subject != subj:
            continue
        if q and q not in c.code.lower() and q not in c.title.lower():
            continue
        out.append(c)
    out.sort(key=lambda c: c.code)
    return out
