"""
ORM model package. Import all models here so Alembic autogenerate
can discover every table through the shared Base metadata.
"""
from taskflow.models.user import User  # noqa: F401
from taskflow.models.project import Project, project_members  # noqa: F401
from taskflow.models.task import Subtask, Task  # noqa: F401
from taskflow.models.comment import Comment  # noqa: F401
from taskflow.models.activity_log import ActivityLog  # noqa: F401
