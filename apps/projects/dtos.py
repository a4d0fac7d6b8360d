from datetime import date
from typing import Optional

from ninja import Schema
from ninja.orm import create_schema
from pydantic import Field

from .models import Project, Task

ProjectOut = create_schema(Project)


class ProjectIn(Schema):
    name: str = Field(min_length=5, max_length=30)
    topic: Optional[str] = Field(default=None, min_length=5, max_length=20)


class TaskOut(Schema):
    id: int
    name: str
    deadline: Optional[date] = None
    iscompleted: bool
    projectid: int

    @staticmethod
    def resolve_projectid(obj: Task) -> int:
        return obj.project_id


class TaskIn(Schema):
    name: str = Field(min_length=1, max_length=255)
    deadline: Optional[date] = None
