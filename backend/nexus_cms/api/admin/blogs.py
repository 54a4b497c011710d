from flask_jwt_extended import jwt_required

from nexus_cms.application import blogs as blog_cases
from nexus_cms.application.blogs import blogs
from nexus_cms.domain.exceptions import ValidationError
from nexus_cms.normalizers.blog import normalize_blog, normalize_faq
from nexus_cms.utils import validation
from nexus_cms.utils.decorators import permission_required
from nexus_cms.utils.media import asset_url
from nexus_cms.utils.request_data import request_payload
from nexus_cms.utils.responses import success
from . import admin_bp
from .crud import register_crud

register_crud(
    admin_bp,
    resource="blogs",
    repository=blogs,
    normalize=normalize_blog,
    permission="blogs",
    noun="blogs",
    post_update=False,
)


@admin_bp.route("/blogs/options", methods=["GET"])
@jwt_required()
@permission_required("view_blogs")
def blog_options():
    return success(blog_cases.blog_options(), "Blog options retrieved successfully")


@admin_bp.route("/blogs/statistics", methods=["GET"])
@jwt_required()
@permission_required("view_blogs")
def blog_statistics():
    return success(blog_cases.blog_statistics(), "Blog statistics retrieved successfully")


@admin_bp.route("/blogs/mark-as-hero", methods=["POST"])
@jwt_required()
@permission_required("edit_blogs")
def mark_as_hero():
    data = request_payload()
    token = validation.string(data, "encoded_id", required=True)
    blog = blog_cases.mark_as_hero(token=token)
    return success(normalize_blog(blog, admin=True), "Blog marked as hero successfully")


@admin_bp.route("/blogs/bulk-update-category", methods=["POST"])
@jwt_required()
@permission_required("edit_blogs")
def bulk_update_category():
    data = request_payload()
    tokens = validation.token_list(data)
    category = validation.string(data, "category", required=True)
    result = blog_cases.bulk_update_category(tokens=tokens, category=category)
    return success(result, f"Category updated for {result['processed_count']} blogs")


@admin_bp.route("/blogs/upload-content-image", methods=["POST"])
@jwt_required()
@permission_required("create_blogs")
def upload_content_image():
    data = request_payload()
    if "image" not in data:
        raise ValidationError("The image field is required.")
    path = blog_cases.upload_content_image(file=data["image"])
    return success({"url": asset_url(path), "path": path}, "Image uploaded successfully")


# -------------------------------------------------
# FAQs
# -------------------------------------------------

@admin_bp.route("/blogs/<token>/faqs", methods=["GET"])
@jwt_required()
@permission_required("manage_blog_faqs")
def list_faqs(token):
    blog = blogs.get(token)
    return success([normalize_faq(f) for f in blog.faqs], "FAQs retrieved successfully")


@admin_bp.route("/blogs/<token>/faqs", methods=["POST"])
@jwt_required()
@permission_required("manage_blog_faqs")
def create_faq(token):
    blog = blogs.get(token)
    faq = blog_cases.create_faq(blog=blog, data=request_payload())
    return success(normalize_faq(faq), "FAQ created successfully", 201)


@admin_bp.route("/blogs/<token>/faqs/<faq_token>", methods=["GET"])
@jwt_required()
@permission_required("manage_blog_faqs")
def show_faq(token, faq_token):
    faq = blog_cases.get_faq(blog=blogs.get(token), token=faq_token)
    return success(normalize_faq(faq), "FAQ retrieved successfully")


@admin_bp.route("/blogs/<token>/faqs/<faq_token>", methods=["PUT", "POST"])
@jwt_required()
@permission_required("manage_blog_faqs")
def update_faq(token, faq_token):
    faq = blog_cases.get_faq(blog=blogs.get(token), token=faq_token)
    faq = blog_cases.update_faq(faq=faq, data=request_payload())
    return success(normalize_faq(faq), "FAQ updated successfully")


@admin_bp.route("/blogs/<token>/faqs/<faq_token>", methods=["DELETE"])
@jwt_required()
@permission_required("manage_blog_faqs")
def delete_faq(token, faq_token):
    faq = blog_cases.get_faq(blog=blogs.get(token), token=faq_token)
    blog_cases.delete_faq(faq=faq)
    return success(None, "FAQ deleted successfully")
