"""Tests for jobs and the public application flow."""

from conftest import document_upload

from nexus_cms.extensions import db
from nexus_cms.models.job import Job, JobApplication


def _application_form(**overrides):
    form = {
        "first_name": "Ada",
        "last_name": "Obi",
        "email": "ada@example.com",
        "phone": "+2348000000000",
        "cover_letter": "I would like to join.",
        "years_of_experience": "4",
        "availability": "1-month",
        "resume": document_upload(),
    }
    form.update(overrides)
    return form


def _apply(client, slug, **overrides):
    return client.post(
        f"/api/public/jobs/{slug}/apply",
        data=_application_form(**overrides),
        content_type="multipart/form-data",
    )


class TestApply:
    def test_application_is_stored(self, client, make_job):
        job = make_job()

        response = _apply(client, job.slug)

        assert response.status_code == 201
        body = response.get_json()["data"]
        application = JobApplication.query.one()
        assert body["application_id"] == application.encoded_id
        assert application.status == "pending"
        assert application.resume_path.startswith("job-applications/resumes/")
        assert db.session.get(Job, job.id).applications_count == 1

    def test_second_application_for_same_job_is_rejected(self, client, make_job):
        job = make_job()
        assert _apply(client, job.slug).status_code == 201

        response = _apply(client, job.slug, email="ADA@example.com")

        assert response.status_code == 422
        assert response.get_json()["message"] == "You have already applied for this job"
        assert JobApplication.query.filter_by(job_id=job.id).count() == 1

    def test_same_applicant_may_apply_to_another_job(self, client, make_job):
        first = make_job("site-engineer")
        second = make_job("quantity-surveyor")

        assert _apply(client, first.slug).status_code == 201
        assert _apply(client, second.slug).status_code == 201

    def test_inactive_job_is_not_found(self, client, make_job):
        job = make_job(is_active=False)
        response = _apply(client, job.slug)
        assert response.status_code == 404
        assert JobApplication.query.count() == 0

    def test_resume_must_be_a_document(self, client, make_job):
        job = make_job()
        response = _apply(client, job.slug, resume=document_upload("resume.exe"))
        assert response.status_code == 422
        assert JobApplication.query.count() == 0

    def test_resume_size_is_capped(self, client, make_job):
        job = make_job()
        response = _apply(client, job.slug, resume=document_upload(size=5121 * 1024))
        assert response.status_code == 422


class TestJobAdmin:
    def test_job_with_applications_cannot_be_deleted(self, client, admin_headers, make_job):
        job = make_job()
        _apply(client, job.slug)

        response = client.delete(f"/api/admin/jobs/{job.encoded_id}", headers=admin_headers)

        assert response.status_code == 422
        assert response.get_json()["message"] == "Cannot delete job with existing applications"
        assert db.session.get(Job, job.id) is not None

    def test_job_without_applications_is_deleted(self, client, admin_headers, make_job):
        job = make_job()
        response = client.delete(f"/api/admin/jobs/{job.encoded_id}", headers=admin_headers)
        assert response.status_code == 200
        assert Job.query.count() == 0

    def test_create_job(self, client, admin_headers):
        response = client.post(
            "/api/admin/jobs",
            json={
                "title": "Site Engineer",
                "slug": "site-engineer",
                "location": "Abuja",
                "type": "contract",
                "key_responsibilities": "Supervise works",
                "preferred_qualifications": "B.Eng",
            },
            headers=admin_headers,
        )
        assert response.status_code == 201
        assert response.get_json()["data"]["type_label"] == "Contract"

    def test_invalid_job_type_is_rejected(self, client, admin_headers):
        response = client.post(
            "/api/admin/jobs",
            json={
                "title": "Site Engineer",
                "slug": "site-engineer",
                "location": "Abuja",
                "type": "gig",
                "key_responsibilities": "Supervise works",
                "preferred_qualifications": "B.Eng",
            },
            headers=admin_headers,
        )
        assert response.status_code == 422


class TestApplicationReview:
    def test_status_update_records_reviewer(self, client, admin_headers, super_admin, make_job):
        job = make_job()
        _apply(client, job.slug)
        application = JobApplication.query.one()

        response = client.patch(
            f"/api/admin/job-applications/{application.encoded_id}/status",
            json={"status": "shortlisted", "admin_notes": "Strong portfolio"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        application = db.session.get(JobApplication, application.id)
        assert application.status == "shortlisted"
        assert application.reviewed_by == super_admin.id
        assert application.reviewed_at is not None

    def test_unknown_status_is_rejected(self, client, admin_headers, make_job):
        job = make_job()
        _apply(client, job.slug)
        application = JobApplication.query.one()

        response = client.patch(
            f"/api/admin/job-applications/{application.encoded_id}/status",
            json={"status": "archived"},
            headers=admin_headers,
        )
        assert response.status_code == 422

    def test_delete_refreshes_counter(self, client, admin_headers, make_job):
        job = make_job()
        _apply(client, job.slug)
        application = JobApplication.query.one()

        response = client.delete(
            f"/api/admin/job-applications/{application.encoded_id}", headers=admin_headers
        )

        assert response.status_code == 200
        assert JobApplication.query.count() == 0
        assert db.session.get(Job, job.id).applications_count == 0
