from flask import Blueprint

# single main blueprint for the JSON API (debug has its own)
main_bp = Blueprint("main", __name__)

# import route modules so they register on main_bp (hence the # noqa: F401)
from . import main       # noqa: F401
from . import courses    # noqa: F401
from . import diagram    # noqa: F401
