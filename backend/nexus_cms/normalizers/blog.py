from nexus_cms.utils.media import asset_url
from .common import normalize_author, timestamp


def normalize_faq(faq):
    return {
        "id": faq.encoded_id,
        "question": faq.question,
        "answer": faq.answer,
        "order": faq.order,
        "created_at": timestamp(faq.created_at),
        "updated_at": timestamp(faq.updated_at),
    }


def normalize_blog(blog, admin=False, include_faqs=True):
    data = {
        "id": blog.encoded_id,
        "title": blog.title,
        "slug": blog.slug,
        "cover_photo": asset_url(blog.cover_photo),
        "category": blog.category,
        "content": blog.content,
        "tags": blog.tags,
        "headings": blog.headings,
        "mark_as_hero": blog.mark_as_hero,
        "author": normalize_author(blog.author),
        "created_at": timestamp(blog.created_at),
        "updated_at": timestamp(blog.updated_at),
    }

    if admin:
        data["is_active"] = blog.is_active

    if include_faqs:
        data["faqs"] = [normalize_faq(f) for f in blog.faqs]

    return data


def normalize_blog_summary(blog):
    return {
        "id": blog.encoded_id,
        "slug": blog.slug,
        "title": blog.title,
        "category": blog.category,
        "cover_photo": asset_url(blog.cover_photo),
        "created_at": timestamp(blog.created_at),
        "updated_at": timestamp(blog.updated_at),
    }
