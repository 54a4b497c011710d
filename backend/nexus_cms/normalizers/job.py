from nexus_cms.domain.lifecycle.application import STATUS_DETAILS, status_color
from nexus_cms.models.job import AVAILABILITY_OPTIONS, JOB_TYPES
from nexus_cms.utils.media import asset_url
from .common import normalize_author, timestamp


def normalize_job(job, admin=False):
    data = {
        "id": job.encoded_id,
        "title": job.title,
        "slug": job.slug,
        "location": job.location,
        "type": job.type,
        "type_label": JOB_TYPES.get(job.type, job.type),
        "key_responsibilities": job.key_responsibilities,
        "preferred_qualifications": job.preferred_qualifications,
        "created_at": timestamp(job.created_at),
        "updated_at": timestamp(job.updated_at),
    }
    if admin:
        data["is_active"] = job.is_active
        data["applications_count"] = job.applications_count
        data["author"] = normalize_author(job.author)
    return data


def normalize_application(application, detail=False):
    data = {
        "id": application.encoded_id,
        "job": {
            "id": application.job.encoded_id,
            "title": application.job.title,
            "slug": application.job.slug,
            "location": application.job.location,
        },
        "first_name": application.first_name,
        "last_name": application.last_name,
        "full_name": application.full_name,
        "email": application.email,
        "phone": application.phone,
        "years_of_experience": application.years_of_experience,
        "availability": application.availability,
        "availability_label": AVAILABILITY_OPTIONS.get(application.availability),
        "status": application.status,
        "status_label": STATUS_DETAILS.get(application.status, {}).get("label"),
        "status_color": status_color(application.status),
        "reviewed_at": timestamp(application.reviewed_at),
        "created_at": timestamp(application.created_at),
    }

    if detail:
        data.update(
            {
                "address": application.address,
                "linkedin_profile": application.linkedin_profile,
                "portfolio_website": application.portfolio_website,
                "cover_letter": application.cover_letter,
                "resume_url": asset_url(application.resume_path),
                "portfolio_url": asset_url(application.portfolio_path),
                "additional_documents": [
                    asset_url(path) for path in (application.additional_documents or [])
                ],
                "current_position": application.current_position,
                "current_company": application.current_company,
                "expected_salary": (
                    float(application.expected_salary)
                    if application.expected_salary is not None
                    else None
                ),
                "willing_to_relocate": application.willing_to_relocate,
                "admin_notes": application.admin_notes,
                "reviewer": normalize_author(application.reviewer),
                "updated_at": timestamp(application.updated_at),
            }
        )

    return data
