from typing import Any, Dict

from nexus_cms.models.setting import Setting
from nexus_cms.utils import validation
from nexus_cms.utils.media import is_upload, validate_image
from nexus_cms.utils.transaction import asset_transaction

COUNTERS = ("years", "projects", "clients", "engineers")


def get_settings() -> Setting:
    return Setting.current()


def update_settings(*, data: Dict[str, Any]) -> Setting:
    setting = Setting.current()

    attrs: Dict[str, Any] = {
        "our_mission": validation.string(data, "our_mission", required=True),
        "our_vision": validation.string(data, "our_vision", required=True),
        "portfolio": validation.string(data, "portfolio", required=True),
    }
    for counter in COUNTERS:
        attrs[counter] = validation.integer(data, counter, required=True, min_value=0)

    image = data.get("image")
    if is_upload(image):
        validate_image(image)

    with asset_transaction() as changes:
        for field, value in attrs.items():
            setattr(setting, field, value)
        if is_upload(image):
            changes.discard(setting.image)
            setting.image = changes.store(image, "settings")

    return setting
