from contextlib import contextmanager
from typing import List

from nexus_cms.extensions import db
from .media import delete_assets, store_asset


@contextmanager
def transactional():
    """Context manager for database transactions."""
    try:
        yield
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise


class AssetChanges:
    """Files written and files made stale during one unit of work."""

    def __init__(self):
        self.stored: List[str] = []
        self.stale: List[str] = []

    def store(self, file, directory: str) -> str:
        path = store_asset(file, directory)
        self.stored.append(path)
        return path

    def discard(self, path) -> None:
        if path:
            self.stale.append(path)


@contextmanager
def asset_transaction():
    """
    Like ``transactional`` but also owns the file side of the write.

    Stale files are removed only after a successful commit. Files stored
    during a failed write are removed again.
    """
    changes = AssetChanges()
    try:
        with transactional():
            yield changes
    except Exception:
        delete_assets(changes.stored)
        raise

    delete_assets(path for path in changes.stale if path not in changes.stored)
