from typing import Any, Dict, List, Optional

from nexus_cms.domain.exceptions import ValidationError
from nexus_cms.extensions import db
from nexus_cms.utils.media import is_upload, normalize_asset_path, validate_image
from nexus_cms.utils.request_data import is_null
from nexus_cms.utils.transaction import AssetChanges


def _section_order(entry: Dict[str, Any], index: int) -> int:
    order = entry.get("order")
    if order is None or order == "":
        return index
    try:
        return int(order)
    except (TypeError, ValueError):
        raise ValidationError("The sections order must be an integer.")


def _text(entry, key, max_length=None) -> Optional[str]:
    value = entry.get(key)
    if is_null(value):
        return None
    if not isinstance(value, str):
        raise ValidationError(f"The sections {key} must be a string.")
    if max_length is not None and len(value) > max_length:
        raise ValidationError(
            f"The sections {key} must not be greater than {max_length} characters."
        )
    return value


def replace_sections(
    *,
    owner,
    entries: List[Dict[str, Any]],
    section_model,
    directory: str,
    changes: AssetChanges,
) -> None:
    """
    Delete-all, re-insert section replacement.

    Image resolution per entry:
    - an upload is validated and stored
    - a string that names one of the owner's current section images keeps it
    - for legacy ``image{N}`` entries without a value, the image previously
      held at the same order is kept
    Old images no longer referenced are handed to ``changes`` as stale, so
    they are removed only after the new rows commit.
    """
    existing = list(owner.sections)
    existing_images = {s.image for s in existing if s.image}
    image_by_order = {s.order: s.image for s in existing if s.image}

    # Validate every upload before touching storage or rows
    for entry in entries:
        if is_upload(entry.get("image")):
            validate_image(entry["image"], field="section image")

    referenced = set()
    sections = []
    for index, entry in enumerate(entries):
        order = _section_order(entry, index)
        image_value = entry.get("image")

        if is_upload(image_value):
            image = changes.store(image_value, directory)
        elif isinstance(image_value, str) and not is_null(image_value):
            path = normalize_asset_path(image_value)
            image = path if path in existing_images else None
        elif entry.get("legacy") and "image" not in entry:
            image = image_by_order.get(order)
        else:
            image = None

        if image in existing_images:
            referenced.add(image)

        sections.append(
            section_model(
                content=_text(entry, "content"),
                caption=_text(entry, "caption", max_length=255),
                order=order,
                image=image,
            )
        )

    # delete-orphan removes the previous rows on flush
    owner.sections = sorted(sections, key=lambda s: s.order)
    db.session.flush()

    for path in existing_images - referenced:
        changes.discard(path)
