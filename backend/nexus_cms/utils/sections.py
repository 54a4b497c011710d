import json
from typing import Any, Dict, List, Optional

from nexus_cms.domain.exceptions import ValidationError

LEGACY_SECTION_LIMIT = 20


def _legacy_entries(data: Dict[str, Any]) -> Optional[List[Dict[str, Any]]]:
    entries = []
    for n in range(1, LEGACY_SECTION_LIMIT + 1):
        keys = (f"content{n}", f"image{n}", f"caption{n}")
        if not any(key in data for key in keys):
            continue
        entry = {
            "content": data.get(f"content{n}"),
            "caption": data.get(f"caption{n}"),
            "order": n - 1,
            "legacy": True,
        }
        if f"image{n}" in data:
            entry["image"] = data[f"image{n}"]
        entries.append(entry)
    return entries or None


def _index_key(key):
    # digit keys come first in numeric order
    text = str(key)
    return (0, int(text), "") if text.isdigit() else (1, 0, text)


def fold_sections(data: Dict[str, Any]) -> Optional[List[Dict[str, Any]]]:
    """
    Return the canonical section list carried by a payload.

    Accepts the structured ``sections`` array (or its JSON text) and the legacy
    ``content{N}`` / ``image{N}`` / ``caption{N}`` fields, N = 1..20, folding
    the latter into ``{content, image, caption, order=N-1}`` entries. Returns
    None when the payload carries no section data at all.
    """
    sections = data.get("sections")

    if isinstance(sections, str):
        try:
            sections = json.loads(sections) if sections.strip() else []
        except ValueError:
            raise ValidationError("The sections must be an array.")

    if isinstance(sections, dict):
        sections = [sections[k] for k in sorted(sections, key=_index_key)]

    if sections:
        if not isinstance(sections, list) or not all(isinstance(s, dict) for s in sections):
            raise ValidationError("The sections must be an array.")
        return [dict(section) for section in sections]

    legacy = _legacy_entries(data)
    if legacy is not None:
        return legacy

    return [] if "sections" in data else None
