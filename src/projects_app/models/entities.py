# Rev 0.2.0
"""Lightweight entities aligned with migration 0001_projects_schema.sql"""
from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

TWO_PLACES = Decimal("0.01")
# DECIMAL(7,2): five integer digits
MAX_DECIMAL = Decimal("99999.99")

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5


@dataclass
class Category:
    id: int | None
    name: str

    def __str__(self) -> str:
        return f"ID={self.id}, categoryName={self.name}"


@dataclass
class Material:
    id: int | None
    project_id: int
    name: str
    num_required: Optional[int] = None
    cost: Optional[Decimal] = None

    def __str__(self) -> str:
        return (
            f"ID={self.id}, materialName={self.name}, "
            f"numRequired={self.num_required}, cost={self.cost}"
        )


@dataclass
class Step:
    id: int | None
    project_id: int
    text: str
    order: int

    def __str__(self) -> str:
        return f"ID={self.id}, stepText={self.text}"


@dataclass
class Project:
    id: int | None
    name: Optional[str]
    estimated_hours: Optional[Decimal] = None
    actual_hours: Optional[Decimal] = None
    difficulty: Optional[int] = None
    notes: Optional[str] = None
    # populated by fetch-by-id only
    materials: List[Material] = field(default_factory=list)
    steps: List[Step] = field(default_factory=list)
    categories: List[Category] = field(default_factory=list)

    def __str__(self) -> str:
        lines = [
            f"   ID={self.id}",
            f"   name={self.name}",
            f"   estimatedHours={self.estimated_hours}",
            f"   actualHours={self.actual_hours}",
            f"   difficulty={self.difficulty}",
            f"   notes={self.notes}",
        ]
        lines.append("   Materials:")
        lines.extend(f"      {m}" for m in self.materials)
        lines.append("   Steps:")
        lines.extend(f"      {s}" for s in self.steps)
        lines.append("   Categories:")
        lines.extend(f"      {c}" for c in self.categories)
        return "\n".join(lines)

    def summary(self) -> str:
        return f"{self.id}: {self.name}"


def difficulty_is_valid(difficulty: Optional[int]) -> bool:
    """A missing difficulty is allowed; a present one must be 1-5."""
    if difficulty is None:
        return True
    return MIN_DIFFICULTY <= difficulty <= MAX_DIFFICULTY
