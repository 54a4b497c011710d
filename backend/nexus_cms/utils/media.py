import os
import shutil
import uuid
from typing import Iterable, Optional

from flask import current_app
from PIL import Image, UnidentifiedImageError
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from nexus_cms.domain.exceptions import ValidationError

IMAGE_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp"}
IMAGE_FORMATS = {"PNG", "JPEG", "GIF", "WEBP"}
DOCUMENT_EXTENSIONS = {"pdf", "doc", "docx"}
ATTACHMENT_EXTENSIONS = DOCUMENT_EXTENSIONS | {"jpg", "jpeg", "png"}


def is_upload(value) -> bool:
    return isinstance(value, FileStorage) and bool(value.filename)


def _extension(filename: str) -> str:
    return filename.rsplit(".", 1)[1].lower() if "." in filename else ""


def _size(file: FileStorage) -> int:
    stream = file.stream
    position = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(position)
    return size


def validate_upload(file, *, field: str, extensions, max_kb: int) -> FileStorage:
    """Check extension and size of an uploaded file, raising ValidationError."""
    if not is_upload(file):
        raise ValidationError(f"The {field} must be a file.")

    if _extension(file.filename) not in extensions:
        raise ValidationError(
            f"The {field} must be a file of type: {', '.join(sorted(extensions))}."
        )

    if _size(file) > max_kb * 1024:
        raise ValidationError(
            f"The {field} must not be greater than {max_kb} kilobytes."
        )

    return file


def validate_image(file, field: str = "image") -> FileStorage:
    """Validate an image upload by extension, size and decoded content."""
    validate_upload(
        file,
        field=field,
        extensions=IMAGE_EXTENSIONS,
        max_kb=current_app.config["MAX_IMAGE_KB"],
    )

    file.stream.seek(0)
    try:
        image = Image.open(file.stream)
        image.verify()
        image_format = image.format
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
        image_format = None
    finally:
        file.stream.seek(0)

    if image_format not in IMAGE_FORMATS:
        raise ValidationError(f"The {field} must be an image.")

    return file


def _roots():
    storage_root = current_app.config["STORAGE_ROOT"]
    mirror_root = current_app.config.get("PUBLIC_MIRROR_ROOT") or None
    return storage_root, mirror_root


def store_asset(file: FileStorage, directory: str) -> str:
    """
    Store an upload under ``directory`` and mirror it into the public tree.

    Returns the relative storage path (e.g. ``services/covers/<uuid>.png``).
    """
    filename = secure_filename(file.filename)
    ext = _extension(filename)
    unique_filename = f"{uuid.uuid4().hex}.{ext}" if ext else uuid.uuid4().hex
    relative_path = f"{directory.strip('/')}/{unique_filename}"

    storage_root, mirror_root = _roots()
    target = os.path.join(storage_root, relative_path)
    os.makedirs(os.path.dirname(target), exist_ok=True)
    file.stream.seek(0)
    file.save(target)

    if mirror_root:
        mirror_target = os.path.join(mirror_root, relative_path)
        os.makedirs(os.path.dirname(mirror_target), exist_ok=True)
        shutil.copyfile(target, mirror_target)

    return relative_path


def delete_asset(path: Optional[str]) -> bool:
    """
    Remove an asset from the store and its public mirror.

    Failures are logged and swallowed: a stale file never fails the request.
    """
    if not path:
        return False

    removed = False
    for root in _roots():
        if not root:
            continue
        file_path = os.path.join(root, path)
        if not os.path.exists(file_path):
            continue
        try:
            os.remove(file_path)
            removed = True
        except OSError as e:
            current_app.logger.error(f"Failed to delete asset {file_path}: {e}")

    return removed


def delete_assets(paths: Iterable[Optional[str]]) -> None:
    for path in paths:
        delete_asset(path)


def asset_path(path: str) -> str:
    """Absolute path of a stored asset inside the private store."""
    return os.path.join(_roots()[0], path)


def asset_url(path: Optional[str]) -> Optional[str]:
    if not path:
        return None
    return f"{current_app.config['APP_URL']}/storage/{path}"


def normalize_asset_path(value: Optional[str]) -> Optional[str]:
    """Turn an absolute asset URL handed back by a client into a storage path."""
    if not value:
        return None

    prefix = f"{current_app.config['APP_URL']}/storage/"
    if value.startswith(prefix):
        return value[len(prefix):]
    if value.startswith("/storage/"):
        return value[len("/storage/"):]
    return value
