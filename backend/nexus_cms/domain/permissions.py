from .exceptions import Forbidden, Unauthenticated

# Sentinel capability granted to super-admins at bootstrap.
WILDCARD = "*"

PERMISSIONS = [
    # Admin management
    "view_admins",
    "create_admins",
    "edit_admins",
    "delete_admins",
    # Permission management
    "view_permissions",
    "assign_permissions",
    "revoke_permissions",
    # Services
    "view_services",
    "create_services",
    "edit_services",
    "delete_services",
    # Projects
    "view_projects",
    "create_projects",
    "edit_projects",
    "delete_projects",
    # Jobs
    "view_jobs",
    "create_jobs",
    "edit_jobs",
    "delete_jobs",
    # Job applications
    "view_job_applications",
    "manage_job_applications",
    "delete_job_applications",
    # Blogs
    "view_blogs",
    "create_blogs",
    "edit_blogs",
    "delete_blogs",
    "manage_blog_faqs",
    # Feedback
    "view_feedbacks",
    "create_feedbacks",
    "edit_feedbacks",
    "delete_feedbacks",
    # Disciplines
    "view_disciplines",
    "create_disciplines",
    "edit_disciplines",
    "delete_disciplines",
    # Site settings
    "view_settings",
    "edit_settings",
]

DEMO_PERMISSIONS = [
    "view_admins",
    "view_services",
    "view_projects",
    "view_jobs",
    "view_job_applications",
    "view_blogs",
]


def check_permission(principal, permission: str) -> None:
    """
    Fail-closed authorization check.

    Raises Unauthenticated when there is no principal and Forbidden when the
    principal's resolved capability set lacks ``permission``.
    """
    if principal is None:
        raise Unauthenticated()

    granted = principal.permission_names()
    if WILDCARD in granted or permission in granted:
        return

    raise Forbidden(required_permission=permission)


def group_permissions(names):
    """Group permission names by their verb prefix (view, create, ...)."""
    groups: dict[str, list[str]] = {}
    for name in names:
        groups.setdefault(name.split("_", 1)[0], []).append(name)
    return groups
