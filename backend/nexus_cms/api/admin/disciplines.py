from nexus_cms.application.disciplines import disciplines
from nexus_cms.normalizers.content import normalize_discipline
from . import admin_bp
from .crud import register_crud

register_crud(
    admin_bp,
    resource="disciplines",
    repository=disciplines,
    normalize=normalize_discipline,
    permission="disciplines",
    noun="disciplines",
    by_slug=False,
)
