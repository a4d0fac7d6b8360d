"""
Project and task API endpoints.

Every route here requires the session token cookie; ``request.auth`` holds
the caller's user id.
"""
from typing import List

from django.http import HttpRequest
from ninja import Router

from apps.identity.dtos import InfoOut
from apps.identity.jwt_auth import SessionTokenAuth

from .dtos import ProjectIn, ProjectOut, TaskIn, TaskOut
from .services import create_project, delete_project, get_owned_project, list_projects
from .task_service import create_task, list_tasks, toggle_task

router = Router(tags=["Projects"], auth=SessionTokenAuth())


# =============================================================================
# Projects
# =============================================================================

@router.get("", response=List[ProjectOut])
def get_projects(request: HttpRequest):
    return list_projects(request.auth)


@router.post("", response=List[ProjectOut])
def create_project_api(request: HttpRequest, payload: ProjectIn):
    """
    Create a project; responds with all of the caller's projects.
    """
    return create_project(request.auth, payload.name, payload.topic)


@router.delete("/{project_id}", response=InfoOut)
def delete_project_api(request: HttpRequest, project_id: int):
    """
    Delete one of the caller's projects. Succeeds even if nothing matched.
    """
    delete_project(project_id, request.auth)
    return InfoOut()


# =============================================================================
# Tasks
# =============================================================================

@router.get("/{project_id}/tasks", response=List[TaskOut])
def get_tasks(request: HttpRequest, project_id: int):
    project = get_owned_project(project_id, request.auth)
    return list_tasks(project)


@router.post("/{project_id}/tasks", response=List[TaskOut])
def create_task_api(request: HttpRequest, project_id: int, payload: TaskIn):
    project = get_owned_project(project_id, request.auth)
    return create_task(project, payload.name, payload.deadline)


@router.patch("/{project_id}/tasks/{task_id}", response=List[TaskOut])
def toggle_task_api(request: HttpRequest, project_id: int, task_id: int):
    """
    Flip a task's completion flag.

    An unknown task id is not handled and ends in a 500.
    """
    project = get_owned_project(project_id, request.auth)
    return toggle_task(project, task_id)
