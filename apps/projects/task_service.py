"""
Task services.

Callers pass a project that already passed the owner check
(services.get_owned_project).
"""
import logging
from datetime import date
from typing import List, Optional

from django.db import transaction

from .models import Project, Task

logger = logging.getLogger(__name__)


def list_tasks(project: Project) -> List[Task]:
    return list(Task.objects.filter(project=project))


def create_task(project: Project, name: str, deadline: Optional[date] = None) -> List[Task]:
    """
    Insert a task under the project and return the project's task list.
    """
    with transaction.atomic():
        Task.objects.create(project=project, name=name, deadline=deadline)
        return list_tasks(project)


def toggle_task(project: Project, task_id: int) -> List[Task]:
    """
    Flip the completion flag of one task and return the project's task list.

    The row is locked for the read-then-write. Raises Task.DoesNotExist when
    the task is not under this project.
    """
    with transaction.atomic():
        task = Task.objects.select_for_update().get(id=task_id, project=project)
        task.iscompleted = not task.iscompleted
        task.save(update_fields=['iscompleted'])
        logger.debug(f"Task {task.id} in project {project.id} completed={task.iscompleted}")
        return list_tasks(project)
