from flask import Blueprint, jsonify

from services.catalog_store import get_catalog
from services.validation import catalog_report, report_hints

debug_bp = Blueprint("debug", __name__, url_prefix="/debug")


@debug_bp.route("/catalog-report")
def catalog_report_view():
    report = catalog_report(get_catalog())
    return jsonify({"hints": report_hints(report), **report})
