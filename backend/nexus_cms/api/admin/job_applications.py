import os

from flask import request, send_file
from flask_jwt_extended import current_user, jwt_required

from nexus_cms.application import job_applications as cases
from nexus_cms.domain.lifecycle.application import status_options
from nexus_cms.models.job import JobApplication
from nexus_cms.normalizers.job import normalize_application, normalize_job
from nexus_cms.utils import validation
from nexus_cms.utils.decorators import permission_required
from nexus_cms.utils.request_data import request_payload
from nexus_cms.utils.responses import success
from . import admin_bp


@admin_bp.route("/job-applications", methods=["GET"])
@jwt_required()
@permission_required("view_job_applications")
def list_applications():
    applications = cases.list_applications(request.args.to_dict())
    return success(
        [normalize_application(a) for a in applications],
        "Job applications retrieved successfully",
    )


@admin_bp.route("/job-applications/status-options", methods=["GET"])
@jwt_required()
@permission_required("view_job_applications")
def application_status_options():
    return success(status_options(), "Status options retrieved successfully")


@admin_bp.route("/job-applications/statistics", methods=["GET"])
@jwt_required()
@permission_required("view_job_applications")
def application_statistics():
    return success(cases.application_statistics(), "Application statistics retrieved successfully")


@admin_bp.route("/job-applications/job/<job_token>", methods=["GET"])
@jwt_required()
@permission_required("view_job_applications")
def applications_for_job(job_token):
    result = cases.applications_for_job(job_token=job_token)
    return success(
        {
            "job": normalize_job(result["job"], admin=True),
            "applications": [normalize_application(a) for a in result["applications"]],
        },
        "Job applications retrieved successfully",
    )


@admin_bp.route("/job-applications/bulk/delete", methods=["POST"])
@jwt_required()
@permission_required("delete_job_applications")
def bulk_delete_applications():
    tokens = validation.token_list(request_payload())
    result = cases.bulk_delete_applications(tokens=tokens)
    return success(result, f"{result['processed_count']} job applications deleted successfully")


@admin_bp.route("/job-applications/<token>", methods=["GET"])
@jwt_required()
@permission_required("view_job_applications")
def show_application(token):
    application = JobApplication.find_by_token_or_404(token)
    return success(normalize_application(application, detail=True), "Job application retrieved successfully")


@admin_bp.route("/job-applications/<token>/status", methods=["PATCH", "PUT", "POST"])
@jwt_required()
@permission_required("manage_job_applications")
def update_application_status(token):
    application = cases.update_status(token=token, data=request_payload(), reviewer=current_user)
    return success(
        normalize_application(application, detail=True),
        "Application status updated successfully",
    )


@admin_bp.route("/job-applications/<token>/notes", methods=["PATCH", "PUT", "POST"])
@jwt_required()
@permission_required("manage_job_applications")
def add_application_notes(token):
    application = cases.add_notes(token=token, data=request_payload(), reviewer=current_user)
    return success(normalize_application(application, detail=True), "Notes added successfully")


@admin_bp.route("/job-applications/<token>/download/cv", methods=["GET"])
@jwt_required()
@permission_required("view_job_applications")
def download_resume(token):
    path, download_name = cases.resume_file(token=token)
    return send_file(os.path.abspath(path), as_attachment=True, download_name=download_name)


@admin_bp.route("/job-applications/<token>", methods=["DELETE"])
@jwt_required()
@permission_required("delete_job_applications")
def delete_application(token):
    cases.delete_application(token=token)
    return success(None, "Job application deleted successfully")
