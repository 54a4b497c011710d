from nexus_cms.application.services import services
from nexus_cms.normalizers.content import normalize_service
from . import admin_bp
from .crud import register_crud

register_crud(
    admin_bp,
    resource="services",
    repository=services,
    normalize=normalize_service,
    permission="services",
    noun="services",
)
