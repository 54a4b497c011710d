from nexus_cms.models.service import Service, ServiceSection
from nexus_cms.utils import validation
from .disciplines import discipline_tokens, resolve_disciplines
from .repository import ResourceRepository


class ServiceRepository(ResourceRepository):
    model = Service
    label = "Service"
    search_fields = ("title", "description")
    eager = ("sections", "disciplines")
    image_fields = {"cover_photo": "services/covers"}
    required_images = ("cover_photo",)
    section_model = ServiceSection
    section_directory = "services/sections"

    def clean(self, data, instance=None):
        attrs = {}

        if self.wants(data, "title", instance):
            attrs["title"] = validation.string(data, "title", required=True, max_length=255)
        if self.wants(data, "slug", instance):
            attrs["slug"] = validation.string(data, "slug", required=True, max_length=255)
            self.assert_unique("slug", attrs["slug"], instance)
        if "description" in data:
            attrs["description"] = validation.string(data, "description")

        is_active = validation.boolean(data, "is_active")
        if is_active is not None:
            attrs["is_active"] = is_active

        return attrs

    def after_write(self, item, data, changes):
        tokens = discipline_tokens(data)
        if tokens is not None:
            item.disciplines = resolve_disciplines(tokens)


services = ServiceRepository()
