import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from dateutil.parser import parse as parse_date
from flask import current_app
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError

from nexus_cms.domain.exceptions import Conflict, NotFound, ValidationError
from nexus_cms.domain.lifecycle.application import APPLICATION_STATUSES
from nexus_cms.extensions import db
from nexus_cms.models.job import AVAILABILITY_OPTIONS, Job, JobApplication
from nexus_cms.utils import validation
from nexus_cms.utils.mailer import send_email
from nexus_cms.utils.media import (
    ATTACHMENT_EXTENSIONS,
    DOCUMENT_EXTENSIONS,
    asset_path,
    delete_assets,
    is_upload,
    validate_upload,
)
from nexus_cms.utils.transaction import asset_transaction, transactional
from .bulk import run_bulk
from .jobs import jobs

PORTFOLIO_MAX_KB = 10240


def _clean_application(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "first_name": validation.string(data, "first_name", required=True, max_length=255),
        "last_name": validation.string(data, "last_name", required=True, max_length=255),
        "email": validation.email(data, "email", required=True),
        "phone": validation.string(data, "phone", required=True, max_length=20),
        "address": validation.string(data, "address"),
        "linkedin_profile": validation.url(data, "linkedin_profile"),
        "portfolio_website": validation.url(data, "portfolio_website"),
        "cover_letter": validation.string(data, "cover_letter", required=True),
        "years_of_experience": validation.integer(
            data, "years_of_experience", required=True, min_value=0, max_value=50
        ),
        "current_position": validation.string(data, "current_position", max_length=255),
        "current_company": validation.string(data, "current_company", max_length=255),
        "expected_salary": validation.decimal(data, "expected_salary", min_value=0),
        "availability": validation.choice(
            data, "availability", AVAILABILITY_OPTIONS, required=True
        ),
        "willing_to_relocate": bool(validation.boolean(data, "willing_to_relocate")),
    }


def _clean_documents(data: Dict[str, Any]):
    resume = data.get("resume")
    if not is_upload(resume):
        raise ValidationError("The resume field is required.")
    document_kb = current_app.config["MAX_DOCUMENT_KB"]
    validate_upload(resume, field="resume", extensions=DOCUMENT_EXTENSIONS, max_kb=document_kb)

    portfolio = data.get("portfolio")
    if is_upload(portfolio):
        validate_upload(
            portfolio, field="portfolio", extensions=DOCUMENT_EXTENSIONS, max_kb=PORTFOLIO_MAX_KB
        )
    else:
        portfolio = None

    attachments = data.get("additional_documents") or []
    if not isinstance(attachments, list):
        attachments = [attachments]
    attachments = [file for file in attachments if is_upload(file)]
    for file in attachments:
        validate_upload(
            file,
            field="additional documents",
            extensions=ATTACHMENT_EXTENSIONS,
            max_kb=document_kb,
        )

    return resume, portfolio, attachments


def submit_application(*, slug: str, data: Dict[str, Any]) -> JobApplication:
    """
    Public apply flow.

    Responsibilities:
    - job must be active
    - one application per (job, email)
    - documents stored, counter refreshed
    - reviewers notified, best effort
    """
    job = jobs.get_by_slug(slug, active_only=True)
    attrs = _clean_application(data)
    resume, portfolio, attachments = _clean_documents(data)

    if JobApplication.query.filter_by(job_id=job.id, email=attrs["email"]).first():
        raise Conflict("You have already applied for this job")

    try:
        with asset_transaction() as changes:
            application = JobApplication(job_id=job.id, status="pending", **attrs)
            application.resume_path = changes.store(resume, "job-applications/resumes")
            if portfolio is not None:
                application.portfolio_path = changes.store(portfolio, "job-applications/portfolios")
            if attachments:
                application.additional_documents = [
                    changes.store(file, "job-applications/documents") for file in attachments
                ]
            db.session.add(application)
            db.session.flush()
            job.refresh_applications_count()
    except IntegrityError as exc:
        # Concurrent duplicate that slipped past the check above
        raise Conflict("You have already applied for this job") from exc

    current_app.logger.info(f"Job application {application.id} received for job {job.id}")
    notify_reviewers(application)
    return application


def notify_reviewers(application: JobApplication) -> bool:
    job = application.job
    body = "\n".join(
        [
            f"A new application was submitted for {job.title} ({job.location}).",
            "",
            f"Name: {application.full_name}",
            f"Email: {application.email}",
            f"Phone: {application.phone}",
            f"Experience: {application.years_of_experience} years",
            f"Availability: {AVAILABILITY_OPTIONS.get(application.availability, application.availability)}",
            "",
            f"Review it at {current_app.config['DASHBOARD_URL']}/job-applications/{application.encoded_id}",
        ]
    )
    return send_email(
        current_app.config["APPLICATION_NOTIFY_EMAILS"],
        f"New Job Application: {job.title}",
        body,
    )


# -------------------------------------------------
# Admin
# -------------------------------------------------

def _date(value: Optional[str], field: str):
    if not value:
        return None
    try:
        return parse_date(value)
    except (ValueError, OverflowError):
        raise ValidationError(f"The {field} is not a valid date.")


def list_applications(filters: Dict[str, Any]) -> List[JobApplication]:
    query = JobApplication.query

    if filters.get("job_id"):
        job = Job.find_by_token(filters["job_id"])
        if job is None:
            return []
        query = query.filter(JobApplication.job_id == job.id)

    status = filters.get("status")
    if status:
        if status not in APPLICATION_STATUSES:
            raise ValidationError("The selected status is invalid.")
        query = query.filter(JobApplication.status == status)

    reviewed = filters.get("reviewed")
    if reviewed in ("true", "1"):
        query = query.filter(JobApplication.reviewed_at.isnot(None))
    elif reviewed in ("false", "0"):
        query = query.filter(JobApplication.reviewed_at.is_(None))

    date_from = _date(filters.get("date_from"), "date from")
    if date_from is not None:
        query = query.filter(JobApplication.created_at >= date_from)
    date_to = _date(filters.get("date_to"), "date to")
    if date_to is not None:
        query = query.filter(JobApplication.created_at <= date_to)

    search = (filters.get("search") or "").strip()
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(
                JobApplication.first_name.ilike(pattern),
                JobApplication.last_name.ilike(pattern),
                JobApplication.email.ilike(pattern),
                JobApplication.current_position.ilike(pattern),
            )
        )

    return query.order_by(JobApplication.created_at.desc(), JobApplication.id.desc()).all()


def applications_for_job(*, job_token: str) -> Dict[str, Any]:
    job = jobs.get(job_token)
    applications = (
        JobApplication.query
        .filter_by(job_id=job.id)
        .order_by(JobApplication.created_at.desc(), JobApplication.id.desc())
        .all()
    )
    return {"job": job, "applications": applications}


def update_status(*, token: str, data: Dict[str, Any], reviewer) -> JobApplication:
    application = JobApplication.find_by_token_or_404(token)
    status = validation.choice(data, "status", APPLICATION_STATUSES, required=True)
    notes = validation.string(data, "admin_notes")

    with transactional():
        application.status = status
        if notes is not None:
            application.admin_notes = notes
        application.reviewed_at = datetime.now(timezone.utc)
        application.reviewed_by = reviewer.id

    current_app.logger.info(
        f"Application {application.id} moved to {status} by user {reviewer.id}"
    )
    return application


def add_notes(*, token: str, data: Dict[str, Any], reviewer) -> JobApplication:
    application = JobApplication.find_by_token_or_404(token)
    notes = validation.string(data, "admin_notes", required=True)

    with transactional():
        application.admin_notes = notes
        application.reviewed_by = reviewer.id
        if application.reviewed_at is None:
            application.reviewed_at = datetime.now(timezone.utc)

    return application


def resume_file(*, token: str):
    """Absolute path and download name of an application's résumé."""
    application = JobApplication.find_by_token_or_404(token)
    path = asset_path(application.resume_path)

    if not os.path.exists(path):
        current_app.logger.warning(f"Resume missing on disk for application {application.id}")
        raise NotFound("Resume file not found")

    extension = application.resume_path.rsplit(".", 1)[-1]
    download_name = f"{application.first_name}_{application.last_name}_resume.{extension}"
    return path, download_name


def _remove(application: JobApplication) -> List[str]:
    files = application.owned_files()
    job = application.job
    db.session.delete(application)
    db.session.flush()
    job.refresh_applications_count()
    return files


def delete_application(*, token: str) -> None:
    application = JobApplication.find_by_token_or_404(token)
    with transactional():
        files = _remove(application)
    delete_assets(files)


def bulk_delete_applications(*, tokens: List[str]) -> Dict[str, Any]:
    return run_bulk(
        tokens=tokens,
        model=JobApplication,
        label="Job application",
        action=_remove,
    )


def application_statistics() -> Dict[str, Any]:
    by_status = dict(
        db.session.query(JobApplication.status, func.count(JobApplication.id))
        .group_by(JobApplication.status)
        .all()
    )
    since = datetime.now(timezone.utc) - timedelta(days=7)
    return {
        "total_applications": sum(by_status.values()),
        "applications_by_status": {status: by_status.get(status, 0) for status in APPLICATION_STATUSES},
        "unreviewed_applications": JobApplication.query.filter(
            JobApplication.reviewed_at.is_(None)
        ).count(),
        "recent_applications": JobApplication.query.filter(
            JobApplication.created_at >= since
        ).count(),
    }
