"""
Small input validators.

Each helper raises ``ValidationError`` with the first failure it finds; the
message format follows what the admin dashboard already displays.
"""
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional

from nexus_cms.domain.exceptions import ValidationError

from .request_data import is_null

_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_URL = re.compile(r"^https?://[^\s/$.?#].[^\s]*$", re.IGNORECASE)

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


def _label(field: str) -> str:
    return field.replace("_", " ")


def string(
    data: Dict[str, Any],
    field: str,
    *,
    required: bool = False,
    max_length: Optional[int] = None,
    nullable: bool = True,
) -> Optional[str]:
    value = data.get(field)

    if value is None or (isinstance(value, str) and not value.strip()):
        if required or (field in data and not nullable):
            raise ValidationError(f"The {_label(field)} field is required.")
        return None

    if not isinstance(value, (str, int, float)) or isinstance(value, bool):
        raise ValidationError(f"The {_label(field)} must be a string.")

    value = str(value).strip()
    if max_length is not None and len(value) > max_length:
        raise ValidationError(
            f"The {_label(field)} must not be greater than {max_length} characters."
        )
    return value


def choice(data, field, choices: Iterable[str], *, required: bool = False) -> Optional[str]:
    value = string(data, field, required=required)
    if value is not None and value not in choices:
        raise ValidationError(f"The selected {_label(field)} is invalid.")
    return value


def boolean(data, field, *, required: bool = False) -> Optional[bool]:
    value = data.get(field)
    if value is None or value == "":
        if required:
            raise ValidationError(f"The {_label(field)} field is required.")
        return None

    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False

    raise ValidationError(f"The {_label(field)} field must be true or false.")


def integer(
    data,
    field,
    *,
    required: bool = False,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> Optional[int]:
    value = data.get(field)
    if value is None or value == "":
        if required:
            raise ValidationError(f"The {_label(field)} field is required.")
        return None

    if isinstance(value, bool):
        raise ValidationError(f"The {_label(field)} must be an integer.")
    try:
        value = int(str(value).strip())
    except ValueError:
        raise ValidationError(f"The {_label(field)} must be an integer.")

    if min_value is not None and value < min_value:
        raise ValidationError(f"The {_label(field)} must be at least {min_value}.")
    if max_value is not None and value > max_value:
        raise ValidationError(
            f"The {_label(field)} must not be greater than {max_value}."
        )
    return value


def decimal(data, field, *, min_value: Optional[int] = None) -> Optional[Decimal]:
    value = data.get(field)
    if value is None or value == "":
        return None
    try:
        value = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"The {_label(field)} must be a number.")
    if min_value is not None and value < min_value:
        raise ValidationError(f"The {_label(field)} must be at least {min_value}.")
    return value


def email(data, field="email", *, required: bool = False) -> Optional[str]:
    value = string(data, field, required=required, max_length=255)
    if value is not None and not _EMAIL.match(value):
        raise ValidationError(f"The {_label(field)} must be a valid email address.")
    return value.lower() if value else value


def url(data, field, *, required: bool = False) -> Optional[str]:
    value = string(data, field, required=required, max_length=255)
    if value is not None and not _URL.match(value):
        raise ValidationError(f"The {_label(field)} must be a valid URL.")
    return value


def password(data, field="password", *, required: bool = False) -> Optional[str]:
    value = data.get(field)
    if value is None or value == "":
        if required:
            raise ValidationError(f"The {_label(field)} field is required.")
        return None
    if not isinstance(value, str) or len(value) < 8:
        raise ValidationError(f"The {_label(field)} must be at least 8 characters.")
    confirmation = data.get(f"{field}_confirmation")
    if confirmation is not None and confirmation != value:
        raise ValidationError(f"The {_label(field)} confirmation does not match.")
    return value


def string_list(data, field, *, max_length: Optional[int] = None) -> Optional[List[str]]:
    value = data.get(field)
    if value is None:
        return None
    if isinstance(value, str):
        value = [part.strip() for part in value.split(",") if part.strip()]
    if not isinstance(value, list):
        raise ValidationError(f"The {_label(field)} must be an array.")

    cleaned = []
    for item in value:
        if not isinstance(item, str):
            raise ValidationError(f"The {_label(field)} items must be strings.")
        item = item.strip()
        if max_length is not None and len(item) > max_length:
            raise ValidationError(
                f"The {_label(field)} items must not be greater than {max_length} characters."
            )
        if item:
            cleaned.append(item)
    return cleaned


def token_list(data, field: str = "ids") -> List[str]:
    """Bulk endpoints take a non-empty array of encoded ids."""
    value = data.get(field)
    if value is None:
        raise ValidationError(f"The {_label(field)} field is required.")
    if not isinstance(value, list):
        raise ValidationError(f"The {_label(field)} must be an array.")
    if len(value) < 1:
        raise ValidationError(f"The {_label(field)} must have at least 1 items.")
    return [str(item) for item in value]


def image_value(data, field):
    """
    Classify an image field in an update payload.

    Returns ``(present, value)``: absent fields are ``(False, None)``, an
    explicit null (or empty form value) is ``(True, None)``.
    """
    if field not in data:
        return False, None
    value = data[field]
    if is_null(value):
        return True, None
    return True, value
