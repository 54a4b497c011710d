from .user import User, Role, Permission, TokenBlocklist
from .blog import Blog, BlogFaq
from .discipline import Discipline, DisciplineSection
from .service import Service, ServiceSection
from .project import Project, ProjectSection
from .job import Job, JobApplication
from .feedback import Feedback
from .setting import Setting

__all__ = [
    "User",
    "Role",
    "Permission",
    "TokenBlocklist",
    "Blog",
    "BlogFaq",
    "Discipline",
    "DisciplineSection",
    "Service",
    "ServiceSection",
    "Project",
    "ProjectSection",
    "Job",
    "JobApplication",
    "Feedback",
    "Setting",
]
