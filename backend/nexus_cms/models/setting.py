from sqlalchemy.exc import IntegrityError

from nexus_cms.extensions import db
from .base import BaseModel

SINGLETON_ID = 1


class Setting(BaseModel):
    __tablename__ = "settings"

    our_mission = db.Column(db.Text, nullable=True)
    our_vision = db.Column(db.Text, nullable=True)
    years = db.Column(db.Integer, nullable=False, default=0)
    projects = db.Column(db.Integer, nullable=False, default=0)
    clients = db.Column(db.Integer, nullable=False, default=0)
    engineers = db.Column(db.Integer, nullable=False, default=0)
    image = db.Column(db.String(255), nullable=True)
    portfolio = db.Column(db.Text, nullable=True)

    @classmethod
    def current(cls):
        """Fetch the singleton row, creating it on first use."""
        setting = db.session.get(cls, SINGLETON_ID)
        if setting is None:
            setting = cls(id=SINGLETON_ID)
            db.session.add(setting)
            try:
                db.session.commit()
            except IntegrityError:
                # Another request created the row first
                db.session.rollback()
                setting = db.session.get(cls, SINGLETON_ID)
        return setting
