from nexus_cms.extensions import db
from .base import BaseModel, SecureIdMixin

BLOG_CATEGORIES = {
    "trending": "Trending",
    "news": "News",
}


class Blog(BaseModel, SecureIdMixin):
    __tablename__ = "blogs"

    not_found_message = "Blog not found"

    title = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), nullable=False, unique=True, index=True)
    cover_photo = db.Column(db.String(255), nullable=True)
    category = db.Column(db.String(20), nullable=False, index=True)
    content = db.Column(db.Text, nullable=False)
    _tags = db.Column("tags", db.Text, nullable=True)
    headings = db.Column(db.JSON, nullable=True)
    mark_as_hero = db.Column(db.Boolean, nullable=False, default=False, index=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True, index=True)
    created_by = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    author = db.relationship("User", lazy="joined")
    faqs = db.relationship(
        "BlogFaq",
        back_populates="blog",
        order_by="BlogFaq.order",
        cascade="all, delete-orphan",
    )

    @property
    def tags(self):
        return [tag for tag in (self._tags or "").split(",") if tag]

    @tags.setter
    def tags(self, values):
        self._tags = ",".join(values) if values else None


class BlogFaq(BaseModel, SecureIdMixin):
    __tablename__ = "blog_faqs"

    not_found_message = "FAQ not found"

    blog_id = db.Column(db.Integer, db.ForeignKey("blogs.id", ondelete="CASCADE"), nullable=False, index=True)
    question = db.Column(db.String(500), nullable=False)
    answer = db.Column(db.Text, nullable=False)
    order = db.Column(db.Integer, nullable=False, default=0)

    blog = db.relationship("Blog", back_populates="faqs")
