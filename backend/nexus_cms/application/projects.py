from nexus_cms.models.project import Project, ProjectSection
from nexus_cms.utils import validation
from .disciplines import discipline_tokens, resolve_disciplines
from .repository import ResourceRepository


class ProjectRepository(ResourceRepository):
    model = Project
    label = "Project"
    search_fields = ("title", "description")
    eager = ("sections", "disciplines")
    image_fields = {"cover_photo": "projects/covers"}
    required_images = ("cover_photo",)
    section_model = ProjectSection
    section_directory = "projects/sections"

    def clean(self, data, instance=None):
        attrs = {}

        if self.wants(data, "title", instance):
            attrs["title"] = validation.string(data, "title", required=True, max_length=255)
        if self.wants(data, "slug", instance):
            attrs["slug"] = validation.string(data, "slug", required=True, max_length=255)
            self.assert_unique("slug", attrs["slug"], instance)
        if "description" in data:
            attrs["description"] = validation.string(data, "description")

        for flag in ("show_on_home", "is_active"):
            value = validation.boolean(data, flag)
            if value is not None:
                attrs[flag] = value

        return attrs

    def after_write(self, item, data, changes):
        tokens = discipline_tokens(data)
        if tokens is not None:
            item.disciplines = resolve_disciplines(tokens)


projects = ProjectRepository()
