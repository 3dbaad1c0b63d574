"""Diagram endpoint

- GET /api/diagram?subject=CIS&semester=Fall returns renderer nodes/edges
- layouts are memoized per (catalog, subject, semesters); the catalog never changes under a running app
"""

from functools import lru_cache

from flask import abort, current_app, jsonify, request

from . import main_bp
from services.catalog_store import load_catalog_cached
from services.course_filter import parse_semesters, select_subject_courses
from services.diagram_layout import LayoutSettings, render_diagram


@lru_cache(maxsize=64)
def _cached_diagram(
    catalog_dir: str,
    subject: str,
    semesters: tuple,
    max_number: int,
    sort_courses: bool,
    settings: LayoutSettings,
) -> dict:
    catalog = load_catalog_cached(catalog_dir)
    courses = select_subject_courses(
        catalog,
        subject,
        max_number=max_number,
        semesters=list(semesters),
    )
    return render_diagram(courses, settings, sort_courses=sort_courses)


@main_bp.get("/api/diagram")
def get_diagram():
    subject = (request.args.get("subject") or "").strip().upper()

    try:
        semesters = parse_semesters(request.args.getlist("semester"))
    except ValueError as e:
        abort(400, description=str(e))

    cfg = current_app.config
    payload = _cached_diagram(
        str(cfg["CATALOG_DIR"]),
        subject,
        tuple(semesters),
        cfg["MAX_COURSE_NUMBER"],
        cfg["SORT_COURSES_BEFORE_GROUPING"],
        LayoutSettings.from_config(cfg),
    )
    return jsonify({"subject": subject, "semesters": semesters, **payload})
