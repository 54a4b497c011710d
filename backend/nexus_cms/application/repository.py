from typing import Any, Dict, Iterable, List, Optional

from flask import current_app
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from nexus_cms.domain.exceptions import NotFound, ValidationError
from nexus_cms.extensions import db
from nexus_cms.utils.media import delete_assets, is_upload, validate_image
from nexus_cms.utils.sections import fold_sections
from nexus_cms.utils.transaction import asset_transaction, transactional
from nexus_cms.utils.validation import image_value
from .bulk import run_bulk
from .sections import replace_sections


class ResourceRepository:
    """
    Create/read/update/delete/list for one content entity.

    Subclasses describe the entity with class attributes and implement
    ``clean`` (payload -> column values). Everything that touches files,
    sections and transactions lives here so every entity behaves the same.
    """

    model: Any = None
    label = "Resource"
    search_fields: Iterable[str] = ("title",)
    # query argument -> column name, equality filters
    filter_fields: Dict[str, str] = {}
    eager: Iterable[str] = ()
    # image attribute -> storage directory
    image_fields: Dict[str, str] = {}
    required_images: Iterable[str] = ()
    section_model: Any = None
    section_directory: Optional[str] = None
    duplicate_message = "The slug has already been taken."

    # -------------------------------------------------
    # Hooks
    # -------------------------------------------------

    def clean(self, data: Dict[str, Any], instance=None) -> Dict[str, Any]:
        raise NotImplementedError

    def after_write(self, item, data: Dict[str, Any], changes) -> None:
        """Relations and derived fields, inside the write transaction."""

    def assert_deletable(self, item, actor=None) -> None:
        """Raise a Conflict when ``item`` must not be deleted."""

    def assert_editable(self, item, data: Dict[str, Any], actor=None) -> None:
        """Raise when ``actor`` may not apply ``data`` to ``item``."""

    def assert_status_change(self, item, status: bool, actor=None) -> None:
        """Raise a Conflict when ``item`` must not change status."""

    def owned_files(self, item) -> List[str]:
        files = [getattr(item, field) for field in self.image_fields]
        if self.section_model is not None:
            files.extend(section.image for section in item.sections)
        return [path for path in files if path]

    # -------------------------------------------------
    # Helpers
    # -------------------------------------------------

    @staticmethod
    def wants(data: Dict[str, Any], field: str, instance) -> bool:
        """Create validates every field; update only the supplied ones."""
        return instance is None or field in data

    def assert_unique(self, field: str, value, instance=None) -> None:
        column = getattr(self.model, field)
        query = self.model.query.filter(column == value)
        if instance is not None and instance.id is not None:
            query = query.filter(self.model.id != instance.id)
        if db.session.query(query.exists()).scalar():
            raise ValidationError(f"The {field} has already been taken.")

    def base_query(self):
        query = self.model.query
        if self.eager:
            query = query.options(
                *[selectinload(getattr(self.model, name)) for name in self.eager]
            )
        return query

    def _apply_images(self, item, data, changes, creating: bool) -> None:
        incoming = {}
        for field in self.image_fields:
            present, value = image_value(data, field)
            if creating and field in self.required_images and not is_upload(value):
                raise ValidationError(f"The {field.replace('_', ' ')} field is required.")
            if present:
                if is_upload(value):
                    validate_image(value, field=field.replace("_", " "))
                incoming[field] = value

        for field, value in incoming.items():
            old = getattr(item, field, None)
            if is_upload(value):
                setattr(item, field, changes.store(value, self.image_fields[field]))
                changes.discard(old)
            elif value is None:
                # Explicit null clears the image
                setattr(item, field, None)
                changes.discard(old)
            # a string is the client echoing the current value back

    # -------------------------------------------------
    # Reads
    # -------------------------------------------------

    def list(self, filters: Optional[Dict[str, Any]] = None, *, active_only: bool = False):
        filters = filters or {}
        query = self.base_query()

        if active_only:
            query = query.filter(self.model.is_active.is_(True))
        elif filters.get("status") == "active":
            query = query.filter(self.model.is_active.is_(True))
        elif filters.get("status") == "inactive":
            query = query.filter(self.model.is_active.is_(False))

        for arg, column in self.filter_fields.items():
            value = filters.get(arg)
            if value not in (None, ""):
                query = query.filter(getattr(self.model, column) == value)

        search = (filters.get("search") or "").strip()
        if search and self.search_fields:
            pattern = f"%{search}%"
            query = query.filter(
                or_(*[getattr(self.model, f).ilike(pattern) for f in self.search_fields])
            )

        return query.order_by(self.model.created_at.desc(), self.model.id.desc()).all()

    def get(self, token):
        return self.model.find_by_token_or_404(token)

    def get_by_slug(self, slug: str, *, active_only: bool = False):
        query = self.base_query().filter(self.model.slug == slug)
        if active_only:
            query = query.filter(self.model.is_active.is_(True))
        item = query.first()
        if item is None:
            current_app.logger.warning(f"{self.label} not found by slug: {slug}")
            raise NotFound("Resource not found")
        return item

    # -------------------------------------------------
    # Writes
    # -------------------------------------------------

    def create(self, data: Dict[str, Any], *, actor=None):
        attrs = self.clean(data, None)
        sections = fold_sections(data) if self.section_model is not None else None

        try:
            with asset_transaction() as changes:
                item = self.model(**attrs)
                if actor is not None and hasattr(self.model, "created_by"):
                    item.created_by = actor.id
                self._apply_images(item, data, changes, creating=True)
                db.session.add(item)
                db.session.flush()

                if sections:
                    self._replace_sections(item, sections, changes)
                self.after_write(item, data, changes)
        except IntegrityError as exc:
            raise ValidationError(self.duplicate_message) from exc

        current_app.logger.info(f"{self.label} created: {item.id}")
        return item

    def update(self, token_or_item, data: Dict[str, Any], *, actor=None):
        item = (
            token_or_item
            if isinstance(token_or_item, self.model)
            else self.get(token_or_item)
        )
        self.assert_editable(item, data, actor=actor)
        attrs = self.clean(data, item)
        sections = fold_sections(data) if self.section_model is not None else None

        try:
            with asset_transaction() as changes:
                for field, value in attrs.items():
                    setattr(item, field, value)
                self._apply_images(item, data, changes, creating=False)

                if sections is not None:
                    self._replace_sections(item, sections, changes)
                self.after_write(item, data, changes)
        except IntegrityError as exc:
            raise ValidationError(self.duplicate_message) from exc

        return item

    def _replace_sections(self, item, sections, changes) -> None:
        replace_sections(
            owner=item,
            entries=sections,
            section_model=self.section_model,
            directory=self.section_directory,
            changes=changes,
        )

    def delete(self, token, *, actor=None) -> None:
        item = self.get(token)
        self.assert_deletable(item, actor=actor)
        files = self.owned_files(item)
        item_id = item.id

        with transactional():
            db.session.delete(item)

        delete_assets(files)
        current_app.logger.info(f"{self.label} deleted: {item_id}")

    def toggle_active(self, token, *, actor=None):
        item = self.get(token)
        self.assert_status_change(item, not item.is_active, actor=actor)
        with transactional():
            item.is_active = not item.is_active
        return item

    # -------------------------------------------------
    # Bulk
    # -------------------------------------------------

    def bulk_delete(self, tokens: List[str], *, actor=None) -> Dict[str, Any]:
        def _delete(item):
            self.assert_deletable(item, actor=actor)
            files = self.owned_files(item)
            db.session.delete(item)
            return files

        return run_bulk(tokens=tokens, model=self.model, label=self.label, action=_delete)

    def bulk_update_status(self, tokens: List[str], status: bool, *, actor=None) -> Dict[str, Any]:
        def _set_status(item):
            self.assert_status_change(item, status, actor=actor)
            item.is_active = status

        return run_bulk(tokens=tokens, model=self.model, label=self.label, action=_set_status)
