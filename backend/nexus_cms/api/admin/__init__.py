from flask import Blueprint

admin_bp = Blueprint("admin", __name__)

# Import route modules so they register with admin_bp
from . import auth  # noqa: E402,F401
from . import users  # noqa: E402,F401
from . import blogs  # noqa: E402,F401
from . import services  # noqa: E402,F401
from . import projects  # noqa: E402,F401
from . import disciplines  # noqa: E402,F401
from . import jobs  # noqa: E402,F401
from . import job_applications  # noqa: E402,F401
from . import feedbacks  # noqa: E402,F401
from . import settings  # noqa: E402,F401
