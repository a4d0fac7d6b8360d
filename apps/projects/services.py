"""
Project services.

All queries are scoped by the owner's user id; a project id alone never
grants access.
"""
import logging
from typing import List, Optional

from django.db import transaction

from .models import Project

logger = logging.getLogger(__name__)


class ProjectAccessDenied(Exception):
    """The project does not exist or belongs to someone else."""

    def __init__(self, project_id, user_id):
        self.project_id = project_id
        self.user_id = user_id
        super().__init__(f"User {user_id} may not access project {project_id}")


def list_projects(user_id: int) -> List[Project]:
    return list(Project.objects.filter(userid=user_id))


def get_owned_project(project_id: int, user_id: int) -> Project:
    """
    Owner check used by every task route.

    Raises ProjectAccessDenied when no project matches both ids.
    """
    project = Project.objects.filter(id=project_id, userid=user_id).first()
    if project is None:
        logger.warning(f"Security Alert: User {user_id} tried to access project {project_id}")
        raise ProjectAccessDenied(project_id, user_id)
    return project


def create_project(user_id: int, name: str, topic: Optional[str] = None) -> List[Project]:
    """
    Insert a project for the user and return the user's full project list.
    """
    with transaction.atomic():
        project = Project.objects.create(name=name, topic=topic, userid=user_id)
        projects = list_projects(user_id)
    logger.info(f"User {user_id} created project {project.id}")
    return projects


def delete_project(project_id: int, user_id: int) -> bool:
    """
    Delete the project if the user owns it.

    Returns whether a row was removed; callers do not distinguish
    "not found" from "not yours".
    """
    # Counts include cascaded tasks, so look at the project entry only
    _, per_model = Project.objects.filter(id=project_id, userid=user_id).delete()
    deleted = per_model.get(Project._meta.label, 0) > 0
    if deleted:
        logger.info(f"User {user_id} deleted project {project_id}")
    return deleted
