from nexus_cms.models.feedback import Feedback
from nexus_cms.utils import validation
from .repository import ResourceRepository


class FeedbackRepository(ResourceRepository):
    model = Feedback
    label = "Feedback"
    search_fields = ("name", "title", "message")
    image_fields = {"image": "feedbacks"}

    def clean(self, data, instance=None):
        attrs = {}
        if self.wants(data, "name", instance):
            attrs["name"] = validation.string(data, "name", required=True, max_length=255)
        if "title" in data:
            attrs["title"] = validation.string(data, "title", max_length=255)
        if self.wants(data, "message", instance):
            attrs["message"] = validation.string(data, "message", required=True)

        is_active = validation.boolean(data, "is_active")
        if is_active is not None:
            attrs["is_active"] = is_active
        return attrs


feedbacks = FeedbackRepository()


def testimonials():
    return (
        Feedback.query
        .filter(Feedback.is_active.is_(True))
        .order_by(Feedback.created_at.desc(), Feedback.id.desc())
        .all()
    )
