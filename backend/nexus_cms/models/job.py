from nexus_cms.domain.lifecycle.application import APPLICATION_STATUSES
from nexus_cms.extensions import db
from .base import BaseModel, SecureIdMixin

JOB_TYPES = {
    "full-time": "Full Time",
    "part-time": "Part Time",
    "contract": "Contract",
    "internship": "Internship",
    "remote": "Remote",
}

AVAILABILITY_OPTIONS = {
    "immediate": "Immediate",
    "2-weeks": "2 Weeks Notice",
    "1-month": "1 Month Notice",
    "2-months": "2 Months Notice",
    "negotiable": "Negotiable",
}


class Job(BaseModel, SecureIdMixin):
    __tablename__ = "jobs"

    not_found_message = "Job not found"

    title = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), nullable=False, unique=True, index=True)
    location = db.Column(db.String(255), nullable=False, index=True)
    type = db.Column(db.String(20), nullable=False, index=True)
    key_responsibilities = db.Column(db.Text, nullable=False)
    preferred_qualifications = db.Column(db.Text, nullable=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True, index=True)
    applications_count = db.Column(db.Integer, nullable=False, default=0)
    created_by = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    author = db.relationship("User", lazy="joined")
    applications = db.relationship("JobApplication", back_populates="job", lazy="dynamic")

    def refresh_applications_count(self):
        self.applications_count = JobApplication.query.filter_by(job_id=self.id).count()


class JobApplication(BaseModel, SecureIdMixin):
    __tablename__ = "job_applications"

    not_found_message = "Job application not found"

    job_id = db.Column(db.Integer, db.ForeignKey("jobs.id"), nullable=False, index=True)
    first_name = db.Column(db.String(255), nullable=False)
    last_name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    phone = db.Column(db.String(20), nullable=False)
    address = db.Column(db.Text, nullable=True)
    linkedin_profile = db.Column(db.String(255), nullable=True)
    portfolio_website = db.Column(db.String(255), nullable=True)
    cover_letter = db.Column(db.Text, nullable=False)
    resume_path = db.Column(db.String(255), nullable=False)
    portfolio_path = db.Column(db.String(255), nullable=True)
    additional_documents = db.Column(db.JSON, nullable=True)
    years_of_experience = db.Column(db.Integer, nullable=False, default=0)
    current_position = db.Column(db.String(255), nullable=True)
    current_company = db.Column(db.String(255), nullable=True)
    expected_salary = db.Column(db.Numeric(12, 2), nullable=True)
    availability = db.Column(db.String(20), nullable=False)
    willing_to_relocate = db.Column(db.Boolean, nullable=False, default=False)
    status = db.Column(
        db.Enum(*APPLICATION_STATUSES, name="application_status", native_enum=False),
        nullable=False,
        default="pending",
        index=True,
    )
    admin_notes = db.Column(db.Text, nullable=True)
    reviewed_at = db.Column(db.DateTime(timezone=True), nullable=True)
    reviewed_by = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    job = db.relationship("Job", back_populates="applications", lazy="joined")
    reviewer = db.relationship("User", lazy="joined")

    __table_args__ = (
        db.UniqueConstraint("job_id", "email", name="uq_job_application_email"),
    )

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    def owned_files(self):
        return [self.resume_path, self.portfolio_path, *(self.additional_documents or [])]
