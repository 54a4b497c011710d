import json
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

from sqlalchemy import func

from nexus_cms.domain.exceptions import NotFound, ValidationError
from nexus_cms.extensions import db
from nexus_cms.models.blog import BLOG_CATEGORIES, Blog, BlogFaq
from nexus_cms.utils import validation
from nexus_cms.utils.dynamic_dates import refresh_dynamic_dates
from nexus_cms.utils.media import store_asset, validate_image
from nexus_cms.utils.transaction import transactional
from .bulk import run_bulk
from .repository import ResourceRepository

BLOG_VALIDATION_RULES = {
    "title": "required|string|max:255",
    "slug": "required|string|max:255|unique",
    "cover_photo": "required|image|max:4096",
    "category": "required|in:trending,news",
    "content": "required|string",
    "tags": "sometimes|array",
    "headings": "sometimes",
    "mark_as_hero": "sometimes|boolean",
    "is_active": "sometimes|boolean",
}


def _headings(value):
    if isinstance(value, str):
        try:
            return json.loads(value) if value.strip() else None
        except ValueError:
            raise ValidationError("The headings must be valid JSON.")
    return value


class BlogRepository(ResourceRepository):
    model = Blog
    label = "Blog"
    search_fields = ("title",)
    filter_fields = {"category": "category"}
    image_fields = {"cover_photo": "blogs/covers"}
    required_images = ("cover_photo",)

    def clean(self, data, instance=None):
        attrs: Dict[str, Any] = {}

        if self.wants(data, "title", instance):
            attrs["title"] = validation.string(data, "title", required=True, max_length=255)
        if self.wants(data, "slug", instance):
            attrs["slug"] = validation.string(data, "slug", required=True, max_length=255)
            self.assert_unique("slug", attrs["slug"], instance)
        if self.wants(data, "category", instance):
            attrs["category"] = validation.choice(data, "category", BLOG_CATEGORIES, required=True)
        if self.wants(data, "content", instance):
            content = validation.string(data, "content", required=True)
            attrs["content"] = refresh_dynamic_dates(content)
        if "tags" in data:
            attrs["tags"] = validation.string_list(data, "tags", max_length=50)
        if "headings" in data:
            attrs["headings"] = _headings(data.get("headings"))

        for flag in ("mark_as_hero", "is_active"):
            value = validation.boolean(data, flag)
            if value is not None:
                attrs[flag] = value

        return attrs

    def after_write(self, item, data, changes):
        if item.mark_as_hero:
            clear_other_heroes(item)


def clear_other_heroes(blog: Blog) -> None:
    """Un-hero every other blog. Runs inside the caller's transaction."""
    (
        Blog.query
        .filter(Blog.mark_as_hero.is_(True), Blog.id != blog.id)
        .update({"mark_as_hero": False}, synchronize_session="fetch")
    )


blogs = BlogRepository()


def mark_as_hero(*, token: str) -> Blog:
    """
    Make ``token`` the single hero blog.

    Clear and set run in one transaction so there is never a moment with
    two heroes committed.
    """
    blog = blogs.get(token)
    with transactional():
        clear_other_heroes(blog)
        blog.mark_as_hero = True
    return blog


def bulk_update_category(*, tokens: List[str], category: str) -> Dict[str, Any]:
    if category not in BLOG_CATEGORIES:
        raise ValidationError("The selected category is invalid.")

    def _set_category(blog):
        blog.category = category

    return run_bulk(tokens=tokens, model=Blog, label="Blog", action=_set_category)


def upload_content_image(*, file) -> str:
    validate_image(file)
    return store_asset(file, "blog-content")


def blog_options() -> Dict[str, Any]:
    return {
        "categories": BLOG_CATEGORIES,
        "validation_rules": BLOG_VALIDATION_RULES,
    }


def blog_statistics() -> Dict[str, Any]:
    since = datetime.now(timezone.utc) - timedelta(days=30)
    by_category = (
        db.session.query(Blog.category, func.count(Blog.id))
        .group_by(Blog.category)
        .all()
    )
    return {
        "total_blogs": Blog.query.count(),
        "active_blogs": Blog.query.filter(Blog.is_active.is_(True)).count(),
        "inactive_blogs": Blog.query.filter(Blog.is_active.is_(False)).count(),
        "hero_blog": Blog.query.filter(Blog.mark_as_hero.is_(True)).count(),
        "blogs_by_category": {category: count for category, count in by_category},
        "recent_blogs": Blog.query.filter(Blog.created_at >= since).count(),
    }


# -------------------------------------------------
# Public reads
# -------------------------------------------------

def _active():
    return Blog.query.filter(Blog.is_active.is_(True))


def landing() -> Dict[str, Any]:
    latest = _active().order_by(Blog.created_at.desc(), Blog.id.desc())
    return {
        "hero": _active().filter(Blog.mark_as_hero.is_(True)).first(),
        "latest": latest.limit(3).all(),
        "news": latest.filter(Blog.category == "news").limit(3).all(),
        "trending": latest.filter(Blog.category == "trending").limit(3).all(),
    }


def recent(limit: int = 5) -> List[Blog]:
    return _active().order_by(Blog.created_at.desc(), Blog.id.desc()).limit(limit).all()


def related(*, slug: str, limit: int = 3) -> List[Blog]:
    blog = blogs.get_by_slug(slug, active_only=True)
    return (
        _active()
        .filter(Blog.category == blog.category, Blog.id != blog.id)
        .order_by(Blog.created_at.desc(), Blog.id.desc())
        .limit(limit)
        .all()
    )


# -------------------------------------------------
# FAQs
# -------------------------------------------------

def _clean_faq(data, instance=None) -> Dict[str, Any]:
    attrs: Dict[str, Any] = {}
    if instance is None or "question" in data:
        attrs["question"] = validation.string(data, "question", required=True, max_length=500)
    if instance is None or "answer" in data:
        attrs["answer"] = validation.string(data, "answer", required=True)
    order = validation.integer(data, "order", min_value=0)
    if order is not None:
        attrs["order"] = order
    return attrs


def get_faq(*, blog: Blog, token: str) -> BlogFaq:
    faq = BlogFaq.find_by_token_or_404(token)
    # An FAQ addressed under another blog does not exist for this caller
    if faq.blog_id != blog.id:
        raise NotFound(BlogFaq.not_found_message)
    return faq


def create_faq(*, blog: Blog, data: Dict[str, Any]) -> BlogFaq:
    attrs = _clean_faq(data)
    with transactional():
        faq = BlogFaq(blog_id=blog.id, **attrs)
        db.session.add(faq)
    return faq


def update_faq(*, faq: BlogFaq, data: Dict[str, Any]) -> BlogFaq:
    attrs = _clean_faq(data, faq)
    with transactional():
        for field, value in attrs.items():
            setattr(faq, field, value)
    return faq


def delete_faq(*, faq: BlogFaq) -> None:
    with transactional():
        db.session.delete(faq)
