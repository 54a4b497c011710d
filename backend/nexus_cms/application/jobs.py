from typing import Any, Dict, List

from sqlalchemy import func

from nexus_cms.domain.exceptions import Conflict
from nexus_cms.extensions import db
from nexus_cms.models.job import AVAILABILITY_OPTIONS, JOB_TYPES, Job, JobApplication
from nexus_cms.utils import validation
from .repository import ResourceRepository

JOB_SORT_FIELDS = {"created_at", "title", "location", "type"}


class JobRepository(ResourceRepository):
    model = Job
    label = "Job"
    search_fields = ("title", "location", "key_responsibilities")
    filter_fields = {"type": "type", "location": "location"}

    def clean(self, data, instance=None):
        attrs: Dict[str, Any] = {}

        if self.wants(data, "title", instance):
            attrs["title"] = validation.string(data, "title", required=True, max_length=255)
        if self.wants(data, "slug", instance):
            attrs["slug"] = validation.string(data, "slug", required=True, max_length=255)
            self.assert_unique("slug", attrs["slug"], instance)
        if self.wants(data, "location", instance):
            attrs["location"] = validation.string(data, "location", required=True, max_length=255)
        if self.wants(data, "type", instance):
            attrs["type"] = validation.choice(data, "type", JOB_TYPES, required=True)
        for field in ("key_responsibilities", "preferred_qualifications"):
            if self.wants(data, field, instance):
                attrs[field] = validation.string(data, field, required=True)

        is_active = validation.boolean(data, "is_active")
        if is_active is not None:
            attrs["is_active"] = is_active

        return attrs

    def assert_deletable(self, item, actor=None):
        if JobApplication.query.filter_by(job_id=item.id).count():
            raise Conflict("Cannot delete job with existing applications")

    def list_public(self, filters: Dict[str, Any]) -> List[Job]:
        query = self.model.query.filter(Job.is_active.is_(True))

        if filters.get("type"):
            query = query.filter(Job.type == filters["type"])
        if filters.get("location"):
            query = query.filter(Job.location.ilike(f"%{filters['location']}%"))

        search = (filters.get("search") or "").strip()
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                db.or_(
                    Job.title.ilike(pattern),
                    Job.key_responsibilities.ilike(pattern),
                    Job.preferred_qualifications.ilike(pattern),
                )
            )

        sort_by = filters.get("sort_by") or "created_at"
        if sort_by not in JOB_SORT_FIELDS:
            sort_by = "created_at"
        column = getattr(Job, sort_by)
        ordering = column.asc() if filters.get("sort_order") == "asc" else column.desc()
        return query.order_by(ordering, Job.id.desc()).all()


jobs = JobRepository()


def job_locations() -> List[str]:
    rows = (
        db.session.query(Job.location)
        .filter(Job.is_active.is_(True))
        .distinct()
        .order_by(Job.location)
        .all()
    )
    return [location for (location,) in rows]


def job_options() -> Dict[str, Any]:
    return {
        "types": JOB_TYPES,
        "availability": AVAILABILITY_OPTIONS,
        "locations": job_locations(),
    }


def job_statistics() -> Dict[str, Any]:
    by_type = db.session.query(Job.type, func.count(Job.id)).group_by(Job.type).all()
    return {
        "total_jobs": Job.query.count(),
        "active_jobs": Job.query.filter(Job.is_active.is_(True)).count(),
        "jobs_by_type": {job_type: count for job_type, count in by_type},
        "total_applications": JobApplication.query.count(),
        "pending_applications": JobApplication.query.filter_by(status="pending").count(),
    }
