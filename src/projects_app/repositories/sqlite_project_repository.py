# Rev 0.2.0
# projects_app – SQLiteProjectRepository (Rev 0.2.0, schema 0001_projects_schema)
from __future__ import annotations
import sqlite3
from dataclasses import replace
from typing import Any, List, Optional, Sequence

from ..models.entities import Category, Material, Project, Step
from ..utils.logging_setup import get_logger
from .db import Database

CATEGORY_TABLE = "category"
MATERIAL_TABLE = "material"
PROJECT_TABLE = "project"
PROJECT_CATEGORY_TABLE = "project_category"
STEP_TABLE = "step"

# Mutable columns, in binding order
PROJECT_COLUMNS = ("project_name", "estimated_hours", "actual_hours", "difficulty", "notes")
MATERIAL_COLUMNS = ("project_id", "material_name", "num_required", "cost")
STEP_COLUMNS = ("project_id", "step_text", "step_order")

log = get_logger("ProjectRepository")


def _insert_sql(table: str, columns: Sequence[str]) -> str:
    placeholders = ", ".join("?" for _ in columns)
    return f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})"


def _update_sql(table: str, columns: Sequence[str], key: str) -> str:
    sets = ", ".join(f"{c} = ?" for c in columns)
    return f"UPDATE {table} SET {sets} WHERE {key} = ?"


def _select_sql(table: str, key: str, columns: Sequence[str]) -> str:
    return f"SELECT {key}, {', '.join(columns)} FROM {table}"


def _project_params(project: Project) -> tuple:
    return (
        project.name,
        project.estimated_hours,
        project.actual_hours,
        project.difficulty,
        project.notes,
    )


def _row_to_project(row: sqlite3.Row) -> Project:
    return Project(
        id=row["project_id"],
        name=row["project_name"],
        estimated_hours=row["estimated_hours"],
        actual_hours=row["actual_hours"],
        difficulty=row["difficulty"],
        notes=row["notes"],
    )


def _row_to_material(row: sqlite3.Row) -> Material:
    return Material(
        id=row["material_id"],
        project_id=row["project_id"],
        name=row["material_name"],
        num_required=row["num_required"],
        cost=row["cost"],
    )


def _row_to_step(row: sqlite3.Row) -> Step:
    return Step(
        id=row["step_id"],
        project_id=row["project_id"],
        text=row["step_text"],
        order=row["step_order"],
    )


def _row_to_category(row: sqlite3.Row) -> Category:
    return Category(id=row["category_id"], name=row["category_name"])


class SQLiteProjectRepository:
    """
    Project CRUD over the project/material/step/category tables.
    Every public call runs in its own Database.transaction(); failures are
    rolled back and surface as DbError.
    """

    def __init__(self, db: Database):
        self._db = db

    # ---------- projects ----------

    def insert_project(self, project: Project) -> Project:
        sql = _insert_sql(PROJECT_TABLE, PROJECT_COLUMNS)
        with self._db.transaction() as conn:
            cur = conn.execute(sql, _project_params(project))
            project_id = int(cur.lastrowid)
        log.info("Inserted project %s (%s)", project_id, project.name)
        return replace(project, id=project_id)

    def fetch_all_projects(self) -> List[Project]:
        """All projects ordered by name; child collections are left empty."""
        sql = _select_sql(PROJECT_TABLE, "project_id", PROJECT_COLUMNS) + " ORDER BY project_name"
        with self._db.transaction() as conn:
            rows = conn.execute(sql).fetchall()
        return [_row_to_project(r) for r in rows]

    def fetch_project_by_id(self, project_id: int) -> Optional[Project]:
        """Project with materials, steps and categories, or None."""
        sql = _select_sql(PROJECT_TABLE, "project_id", PROJECT_COLUMNS) + " WHERE project_id = ?"
        with self._db.transaction() as conn:
            row = conn.execute(sql, (project_id,)).fetchone()
            if row is None:
                return None
            project = _row_to_project(row)
            project.materials.extend(self._fetch_materials(conn, project_id))
            project.steps.extend(self._fetch_steps(conn, project_id))
            project.categories.extend(self._fetch_categories(conn, project_id))
        return project

    def modify_project_details(self, project: Project) -> bool:
        sql = _update_sql(PROJECT_TABLE, PROJECT_COLUMNS, "project_id")
        with self._db.transaction() as conn:
            cur = conn.execute(sql, _project_params(project) + (project.id,))
            updated = cur.rowcount == 1
        log.info("Modify project %s: updated=%s", project.id, updated)
        return updated

    def delete_project(self, project_id: int) -> bool:
        with self._db.transaction() as conn:
            cur = conn.execute(f"DELETE FROM {PROJECT_TABLE} WHERE project_id = ?", (project_id,))
            deleted = cur.rowcount == 1
        log.info("Delete project %s: deleted=%s", project_id, deleted)
        return deleted

    # ---------- child records ----------

    def insert_material(self, material: Material) -> Material:
        params = (material.project_id, material.name, material.num_required, material.cost)
        with self._db.transaction() as conn:
            cur = conn.execute(_insert_sql(MATERIAL_TABLE, MATERIAL_COLUMNS), params)
            material_id = int(cur.lastrowid)
        return replace(material, id=material_id)

    def insert_step(self, step: Step) -> Step:
        params = (step.project_id, step.text, step.order)
        with self._db.transaction() as conn:
            cur = conn.execute(_insert_sql(STEP_TABLE, STEP_COLUMNS), params)
            step_id = int(cur.lastrowid)
        return replace(step, id=step_id)

    def insert_category(self, name: str) -> Category:
        with self._db.transaction() as conn:
            cur = conn.execute(_insert_sql(CATEGORY_TABLE, ("category_name",)), (name,))
            category_id = int(cur.lastrowid)
        return Category(id=category_id, name=name)

    def add_category_to_project(self, project_id: int, category_id: int) -> None:
        with self._db.transaction() as conn:
            conn.execute(
                _insert_sql(PROJECT_CATEGORY_TABLE, ("project_id", "category_id")),
                (project_id, category_id),
            )

    # ---------- internals ----------

    @staticmethod
    def _fetch_all(conn: sqlite3.Connection, sql: str, params: tuple = ()) -> List[Any]:
        return conn.execute(sql, params).fetchall()

    def _fetch_materials(self, conn: sqlite3.Connection, project_id: int) -> List[Material]:
        sql = _select_sql(MATERIAL_TABLE, "material_id", MATERIAL_COLUMNS) + " WHERE project_id = ? ORDER BY material_id"
        return [_row_to_material(r) for r in self._fetch_all(conn, sql, (project_id,))]

    def _fetch_steps(self, conn: sqlite3.Connection, project_id: int) -> List[Step]:
        sql = _select_sql(STEP_TABLE, "step_id", STEP_COLUMNS) + " WHERE project_id = ? ORDER BY step_order, step_id"
        return [_row_to_step(r) for r in self._fetch_all(conn, sql, (project_id,))]

    def _fetch_categories(self, conn: sqlite3.Connection, project_id: int) -> List[Category]:
        sql = f"""
            SELECT c.category_id, c.category_name
            FROM {CATEGORY_TABLE} c
            JOIN {PROJECT_CATEGORY_TABLE} pc USING (category_id)
            WHERE pc.project_id = ?
            ORDER BY c.category_name
        """
        return [_row_to_category(r) for r in self._fetch_all(conn, sql, (project_id,))]
