# Rev 0.2.0

"""Project service (Rev 0.2.0)
Pass-through to the project repository; turns a missing project into DbError.
"""
from __future__ import annotations
from typing import List, Optional, Protocol

from ..models.entities import Project
from ..models.errors import DbError
from ..utils.logging_setup import get_logger

log = get_logger("ProjectService")


class ProjectRepository(Protocol):
    def insert_project(self, project: Project) -> Project: ...
    def fetch_all_projects(self) -> List[Project]: ...
    def fetch_project_by_id(self, project_id: int) -> Optional[Project]: ...
    def modify_project_details(self, project: Project) -> bool: ...
    def delete_project(self, project_id: int) -> bool: ...


class ProjectService:
    def __init__(self, repo: ProjectRepository):
        self._repo = repo

    def add_project(self, project: Project) -> Project:
        return self._repo.insert_project(project)

    def fetch_all_projects(self) -> List[Project]:
        return self._repo.fetch_all_projects()

    def fetch_project_by_id(self, project_id: int) -> Project:
        project = self._repo.fetch_project_by_id(project_id)
        if project is None:
            log.info("Project %s not found", project_id)
            raise DbError(f"Project with project ID={project_id} does not exist.")
        return project

    def modify_project_details(self, project: Project) -> bool:
        return self._repo.modify_project_details(project)

    def delete_project(self, project_id: int) -> bool:
        return self._repo.delete_project(project_id)
