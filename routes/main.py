from flask import jsonify
from werkzeug.exceptions import HTTPException

from . import main_bp
from services.catalog_store import get_catalog


@main_bp.app_errorhandler(HTTPException)
def handle_http_error(e: HTTPException):
    # API clients get JSON instead of Flask's HTML error pages
    return jsonify(
        {
            "error": {
                "code": e.code,
                "message": e.description or e.name,
            }
        }
    ), e.code


@main_bp.get("/health")
def health():
    return jsonify({"status": "ok", "courses": len(get_catalog())})
