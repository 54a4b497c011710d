from flask import request

from nexus_cms.application import job_applications as application_cases
from nexus_cms.application import jobs as job_cases
from nexus_cms.application.jobs import jobs
from nexus_cms.models.job import AVAILABILITY_OPTIONS, JOB_TYPES
from nexus_cms.normalizers.job import normalize_job
from nexus_cms.utils.request_data import request_payload
from nexus_cms.utils.responses import success
from . import public_bp


@public_bp.route("/jobs", methods=["GET"])
def list_jobs():
    items = jobs.list_public(request.args.to_dict())
    return success([normalize_job(j) for j in items], "Jobs retrieved successfully")


@public_bp.route("/jobs/locations", methods=["GET"])
def job_locations():
    return success(job_cases.job_locations(), "Job locations retrieved successfully")


@public_bp.route("/jobs/types", methods=["GET"])
def job_types():
    return success(JOB_TYPES, "Job types retrieved successfully")


@public_bp.route("/jobs/availability-options", methods=["GET"])
def availability_options():
    return success(AVAILABILITY_OPTIONS, "Availability options retrieved successfully")


@public_bp.route("/jobs/<slug>", methods=["GET"])
def show_job(slug):
    job = jobs.get_by_slug(slug, active_only=True)
    return success(normalize_job(job), "Job retrieved successfully")


@public_bp.route("/jobs/<slug>/apply", methods=["POST"])
def apply(slug):
    application = application_cases.submit_application(slug=slug, data=request_payload())
    job = application.job
    return success(
        {
            "application_id": application.encoded_id,
            "job": {
                "title": job.title,
                "location": job.location,
                "type": job.type,
            },
        },
        "Application submitted successfully",
        201,
    )
