from typing import Any, Dict, List

from nexus_cms.domain.exceptions import NotFound, ValidationError
from nexus_cms.models.discipline import Discipline, DisciplineSection
from nexus_cms.utils import validation
from nexus_cms.utils.slugs import slugify
from .repository import ResourceRepository


class DisciplineRepository(ResourceRepository):
    model = Discipline
    label = "Discipline"
    search_fields = ("title", "description")
    eager = ("sections",)
    image_fields = {"cover_photo": "disciplines/covers"}
    section_model = DisciplineSection
    section_directory = "disciplines/sections"

    def clean(self, data, instance=None):
        attrs: Dict[str, Any] = {}

        if self.wants(data, "title", instance):
            attrs["title"] = validation.string(data, "title", required=True, max_length=255)

        slug = validation.string(data, "slug", max_length=255)
        if slug is None and instance is None:
            slug = slugify(attrs["title"]) or None
            if slug is None:
                raise ValidationError("The slug field is required.")
        if slug is not None:
            self.assert_unique("slug", slug, instance)
            attrs["slug"] = slug

        if "description" in data:
            attrs["description"] = validation.string(data, "description")

        order = validation.integer(data, "order", min_value=0)
        if order is not None:
            attrs["order"] = order

        for flag in ("show_on_home", "is_active"):
            value = validation.boolean(data, flag)
            if value is not None:
                attrs[flag] = value

        return attrs

    def list_public(self) -> List[Discipline]:
        return (
            self.base_query()
            .filter(Discipline.is_active.is_(True))
            .order_by(Discipline.order.asc(), Discipline.id.asc())
            .all()
        )

    def get_public(self, token) -> Discipline:
        discipline = self.get(token)
        if not discipline.is_active:
            raise NotFound(Discipline.not_found_message)
        return discipline


disciplines = DisciplineRepository()


def discipline_tokens(data: Dict[str, Any]):
    """Discipline links arrive as ``discipline_ids`` or ``disciplines``."""
    for field in ("discipline_ids", "disciplines"):
        if field in data:
            value = data[field]
            if value is None or value == "":
                return []
            return value if isinstance(value, list) else [value]
    return None


def resolve_disciplines(tokens) -> List[Discipline]:
    """Encoded ids that do not resolve are dropped, as unknown links are."""
    found = []
    for token in tokens:
        discipline = Discipline.find_by_token(str(token))
        if discipline is not None and discipline not in found:
            found.append(discipline)
    return found
