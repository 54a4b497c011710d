from flask import request

from nexus_cms.application import blogs as blog_cases
from nexus_cms.application.blogs import blogs
from nexus_cms.models.blog import BLOG_CATEGORIES
from nexus_cms.normalizers.blog import normalize_blog, normalize_blog_summary
from nexus_cms.utils.responses import success
from . import public_bp


@public_bp.route("/blogs", methods=["GET"])
def list_blogs():
    filters = {
        "category": request.args.get("category"),
        "search": request.args.get("search"),
    }
    items = blogs.list(filters, active_only=True)
    return success([normalize_blog(b) for b in items], "Blogs retrieved successfully")


@public_bp.route("/blogs/landing", methods=["GET"])
def landing():
    data = blog_cases.landing()
    return success(
        {
            "hero": normalize_blog(data["hero"]) if data["hero"] else None,
            "latest": [normalize_blog(b) for b in data["latest"]],
            "news": [normalize_blog(b) for b in data["news"]],
            "trending": [normalize_blog(b) for b in data["trending"]],
        },
        "Blog landing data retrieved successfully",
    )


@public_bp.route("/blogs/recent", methods=["GET"])
def recent():
    items = blog_cases.recent()
    return success([normalize_blog_summary(b) for b in items], "Recent blogs retrieved successfully")


@public_bp.route("/blogs/categories", methods=["GET"])
def categories():
    return success(BLOG_CATEGORIES, "Blog categories retrieved successfully")


@public_bp.route("/blogs/<slug>", methods=["GET"])
def show_blog(slug):
    blog = blogs.get_by_slug(slug, active_only=True)
    return success(normalize_blog(blog), "Blog retrieved successfully")


@public_bp.route("/blogs/<slug>/related", methods=["GET"])
def related(slug):
    items = blog_cases.related(slug=slug)
    return success([normalize_blog_summary(b) for b in items], "Related blogs retrieved successfully")
