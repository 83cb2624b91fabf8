# Rev 0.2.0

"""Pytest fixtures for projects_app (Rev 0.2.0)"""
from __future__ import annotations
import copy
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from projects_app.models.entities import Project
from projects_app.repositories.db import Database
from projects_app.repositories.sqlite_project_repository import SQLiteProjectRepository
from projects_app.services.project_service import ProjectService


@pytest.fixture()
def db(tmp_path: Path) -> Database:
    database = Database(tmp_path / "test.db")
    database.run_migrations()
    return database


@pytest.fixture()
def repo(db: Database) -> SQLiteProjectRepository:
    return SQLiteProjectRepository(db)


@pytest.fixture()
def service(repo: SQLiteProjectRepository) -> ProjectService:
    return ProjectService(repo)


# --- In-memory stand-in for SQLiteProjectRepository -----------------------

class StubProjectRepository:
    def __init__(self):
        self.projects: Dict[int, Project] = {}
        self._next_id = 1

    def insert_project(self, project: Project) -> Project:
        saved = replace(project, id=self._next_id)
        self.projects[saved.id] = saved
        self._next_id += 1
        return copy.deepcopy(saved)

    def fetch_all_projects(self) -> List[Project]:
        return [copy.deepcopy(p) for p in sorted(self.projects.values(), key=lambda p: p.name or "")]

    def fetch_project_by_id(self, project_id: int) -> Optional[Project]:
        project = self.projects.get(project_id)
        return copy.deepcopy(project) if project else None

    def modify_project_details(self, project: Project) -> bool:
        if project.id not in self.projects:
            return False
        self.projects[project.id] = copy.deepcopy(project)
        return True

    def delete_project(self, project_id: int) -> bool:
        return self.projects.pop(project_id, None) is not None


@pytest.fixture()
def stub_repo() -> StubProjectRepository:
    return StubProjectRepository()


@pytest.fixture()
def stub_service(stub_repo: StubProjectRepository) -> ProjectService:
    return ProjectService(stub_repo)
