from flask import abort, current_app, jsonify, request

from . import main_bp
from services.catalog_store import get_catalog
from services.course_detail import course_detail
from services.prereq_tree import build_prereq_tree
from utils.course_catalog import list_subjects, search_courses
from utils.course_codes import normalize_course_code


def _course_or_404(course_id: str):
    # accepts "ACCT*330", "acct-330", "ACCT 330"
    code = normalize_course_code(course_id)
    course = get_catalog().get(code) if code else None
    if course is None:
        abort(404, description=f"Course {course_id} not found")
    return course


@main_bp.get("/api/subjects")
def subjects():
    return jsonify(list_subjects(get_catalog()))


@main_bp.get("/api/courses")
def list_courses():
    q = (request.args.get("q") or "").strip()
    subject = (request.args.get("subject") or "").strip()
    found = search_courses(get_catalog(), q, subject=subject or None)
    return jsonify([c.to_summary() for c in found])


@main_bp.get("/api/courses/<course_id>")
def get_course_detail(course_id: str):
    course = _course_or_404(course_id)
    return jsonify(
        course_detail(
            course,
            get_catalog(),
            max_depth=current_app.config["PREREQ_TREE_MAX_DEPTH"],
        )
    )


@main_bp.get("/api/courses/<course_id>/tree")
def get_prereq_tree(course_id: str):
    course = _course_or_404(course_id)

    depth_raw = (request.args.get("depth") or "").strip()
    depth = current_app.config["PREREQ_TREE_MAX_DEPTH"]
    if depth_raw:
        try:
            depth = int(depth_raw)
        except ValueError:
            abort(400, description="depth must be an integer.")
        if depth < 0:
            abort(400, description="depth must be zero or positive.")

    tree = build_prereq_tree(course.code, get_catalog(), max_depth=depth)
    return jsonify(tree.to_dict())
