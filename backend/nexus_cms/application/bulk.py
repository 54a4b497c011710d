from typing import Any, Callable, Dict, Iterable, List, Optional

from flask import current_app

from nexus_cms.domain.exceptions import ApiError
from nexus_cms.utils.media import delete_assets
from nexus_cms.utils.transaction import transactional

# An item action may return files that become stale once its change commits.
ItemAction = Callable[[Any], Optional[Iterable[str]]]


def run_bulk(
    *,
    tokens: List[str],
    model,
    label: str,
    action: ItemAction,
) -> Dict[str, Any]:
    """
    Apply ``action`` to every row addressed by ``tokens``.

    Responsibilities:
    - one transaction per item, so a failing item never undoes the others
    - every unresolved token is reported as an error
    - business-rule failures keep their message, anything else is logged
      and reported generically
    - stale files are removed after each item commits
    """
    processed = 0
    errors: List[str] = []

    for token in tokens:
        item = model.find_by_token(token)
        if item is None:
            errors.append(f"{label} not found [{token}]")
            continue

        try:
            with transactional():
                stale = action(item)
        except ApiError as exc:
            errors.append(f"{exc.message} [{token}]")
            continue
        except Exception:
            current_app.logger.exception(f"Bulk {label.lower()} operation failed for [{token}]")
            errors.append(f"Failed to process {label.lower()} [{token}]")
            continue

        processed += 1
        delete_assets(stale or [])

    return {"processed_count": processed, "errors": errors}
