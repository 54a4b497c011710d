from flask_jwt_extended import jwt_required

from nexus_cms.application import jobs as job_cases
from nexus_cms.application.jobs import jobs
from nexus_cms.normalizers.job import normalize_job
from nexus_cms.utils.decorators import permission_required
from nexus_cms.utils.responses import success
from . import admin_bp
from .crud import register_crud

register_crud(
    admin_bp,
    resource="jobs",
    repository=jobs,
    normalize=normalize_job,
    permission="jobs",
    noun="jobs",
)


@admin_bp.route("/jobs/options", methods=["GET"])
@jwt_required()
@permission_required("view_jobs")
def job_options():
    return success(job_cases.job_options(), "Job options retrieved successfully")


@admin_bp.route("/jobs/statistics", methods=["GET"])
@jwt_required()
@permission_required("view_jobs")
def job_statistics():
    return success(job_cases.job_statistics(), "Job statistics retrieved successfully")
