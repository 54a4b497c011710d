from flask import request
from flask_jwt_extended import current_user, jwt_required

from nexus_cms.utils import validation
from nexus_cms.utils.decorators import permission_required
from nexus_cms.utils.request_data import request_payload
from nexus_cms.utils.responses import success


def bulk_message(result, verb: str, noun: str):
    count = result["processed_count"]
    return f"{count} {noun} {verb} successfully"


def register_crud(
    bp,
    *,
    resource: str,
    repository,
    normalize,
    permission: str,
    noun: str,
    by_slug: bool = True,
    post_update: bool = True,
    update_permission: str = None,
):
    """
    Wire the standard admin routes for one repository.

    ``/admin/<resource>`` list and store, ``/<id>`` show, update and delete,
    ``/<id>/toggle-active``, ``/bulk/delete`` and ``/bulk/update-status``.
    Permissions follow the ``view_/create_/edit_/delete_<permission>`` names.
    """
    label = repository.label
    edit = update_permission or f"edit_{permission}"

    def index():
        items = repository.list(request.args.to_dict())
        return success(
            [normalize(item, admin=True) for item in items],
            f"{noun.capitalize()} retrieved successfully",
        )

    def show(token):
        item = repository.get(token)
        return success(normalize(item, admin=True), f"{label} retrieved successfully")

    def show_by_slug(slug):
        item = repository.get_by_slug(slug)
        return success(normalize(item, admin=True), f"{label} retrieved successfully")

    def store():
        item = repository.create(request_payload(), actor=current_user)
        return success(normalize(item, admin=True), f"{label} created successfully", 201)

    def update(token):
        item = repository.update(token, request_payload(), actor=current_user)
        return success(normalize(item, admin=True), f"{label} updated successfully")

    def destroy(token):
        repository.delete(token, actor=current_user)
        return success(None, f"{label} deleted successfully")

    def toggle_active(token):
        item = repository.toggle_active(token, actor=current_user)
        state = "activated" if item.is_active else "deactivated"
        return success(normalize(item, admin=True), f"{label} {state} successfully")

    def bulk_delete():
        data = request_payload()
        result = repository.bulk_delete(validation.token_list(data), actor=current_user)
        return success(result, bulk_message(result, "deleted", noun))

    def bulk_update_status():
        data = request_payload()
        tokens = validation.token_list(data)
        status = validation.boolean(data, "status", required=True)
        result = repository.bulk_update_status(tokens, status, actor=current_user)
        return success(result, f"Status updated for {result['processed_count']} {noun}")

    routes = [
        ("", "index", index, ["GET"], f"view_{permission}"),
        ("", "store", store, ["POST"], f"create_{permission}"),
        ("/bulk/delete", "bulk_delete", bulk_delete, ["POST"], f"delete_{permission}"),
        ("/bulk/update-status", "bulk_update_status", bulk_update_status, ["POST"], edit),
        ("/<token>", "show", show, ["GET"], f"view_{permission}"),
        ("/<token>", "update", update, ["POST", "PUT"] if post_update else ["PUT"], edit),
        ("/<token>", "destroy", destroy, ["DELETE"], f"delete_{permission}"),
        ("/<token>/toggle-active", "toggle_active", toggle_active, ["PATCH", "POST"], edit),
    ]
    if by_slug:
        routes.append(("/slug/<slug>", "show_by_slug", show_by_slug, ["GET"], f"view_{permission}"))

    endpoints = {}
    for rule, name, view, methods, needed in routes:
        endpoint = f"{resource.replace('-', '_')}_{name}"
        wrapped = jwt_required()(permission_required(needed)(view))
        bp.add_url_rule(f"/{resource}{rule}", endpoint, wrapped, methods=methods)
        endpoints[name] = endpoint
    return endpoints
