from flask import Blueprint

public_bp = Blueprint("public", __name__)

# Import route modules so they register with public_bp
from . import content  # noqa: E402,F401
from . import blogs  # noqa: E402,F401
from . import jobs  # noqa: E402,F401
