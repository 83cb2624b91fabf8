# Rev 0.2.0
"""
Developer seed: demo projects with materials, steps and categories.
Inserts through SQLiteProjectRepository and prints a summary.

Usage:
    python -m projects_app.dev_seed [--db PATH]
    python -m projects_app.tools.migrate up --seed
"""

from __future__ import annotations

import argparse
from decimal import Decimal
from pathlib import Path
from typing import List, Optional

from .models.entities import Material, Project, Step
from .repositories.db import Database
from .repositories.sqlite_project_repository import SQLiteProjectRepository
from .utils.config import load_settings

SAMPLE_PROJECTS = [
    {
        "project": Project(
            id=None,
            name="Hang a door",
            estimated_hours=Decimal("4.00"),
            actual_hours=Decimal("3.50"),
            difficulty=3,
            notes="Use the door hangers from Home Depot",
        ),
        "materials": [
            ("Door in frame", 1, Decimal("150.00")),
            ("Package of door hangers from Home Depot", 1, Decimal("3.25")),
            ("2-inch screws", 20, Decimal("4.00")),
        ],
        "steps": [
            "Align hangers on opening side of door vertically on the wall",
            "Screw hangers into frame",
        ],
        "categories": ["Doors and Windows", "Repairs"],
    },
    {
        "project": Project(
            id=None,
            name="Build a bookshelf",
            estimated_hours=Decimal("6.00"),
            difficulty=2,
            notes="Pine boards, stained",
        ),
        "materials": [
            ("1x10 pine board, 6 ft", 4, Decimal("18.75")),
            ("Wood stain", 1, Decimal("12.40")),
        ],
        "steps": [
            "Cut boards to length",
            "Assemble frame",
            "Apply stain",
        ],
        "categories": ["Woodworking"],
    },
]


def run_seed(repo: SQLiteProjectRepository) -> List[Project]:
    categories = {}
    seeded: List[Project] = []
    for sample in SAMPLE_PROJECTS:
        project = repo.insert_project(sample["project"])
        for name, num_required, cost in sample["materials"]:
            repo.insert_material(Material(id=None, project_id=project.id, name=name, num_required=num_required, cost=cost))
        for order, text in enumerate(sample["steps"], start=1):
            repo.insert_step(Step(id=None, project_id=project.id, text=text, order=order))
        for name in sample["categories"]:
            if name not in categories:
                categories[name] = repo.insert_category(name)
            repo.add_category_to_project(project.id, categories[name].id)
        seeded.append(repo.fetch_project_by_id(project.id))
    return seeded


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="projects-seed", description="Insert demo projects")
    p.add_argument("--db", type=Path, default=None, help="Path to SQLite DB (default: settings / PROJECTS_DB)")
    ns = p.parse_args(argv)

    db = Database(ns.db or load_settings()["database"]["path"])
    db.run_migrations()
    print("=== Seeding projects ===")
    for project in run_seed(SQLiteProjectRepository(db)):
        print(project)
    print("=== Seed complete ===")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
