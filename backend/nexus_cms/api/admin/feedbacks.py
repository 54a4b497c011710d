from nexus_cms.application.feedback import feedbacks
from nexus_cms.normalizers.content import normalize_feedback
from . import admin_bp
from .crud import register_crud

register_crud(
    admin_bp,
    resource="feedbacks",
    repository=feedbacks,
    normalize=normalize_feedback,
    permission="feedbacks",
    noun="feedbacks",
    by_slug=False,
)
