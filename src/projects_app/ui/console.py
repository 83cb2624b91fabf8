# Rev 0.2.0
# src/projects_app/ui/console.py
"""Line-oriented menu front-end for the project service.

The current selection lives in ``MenuState``, which ``process_selection``
takes and returns; input and output are injected so the loop can be driven
from tests without a terminal or a live database.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Context, Decimal, Inexact, InvalidOperation
from typing import Callable, Optional

from ..models.entities import MAX_DECIMAL, TWO_PLACES, Project, difficulty_is_valid
from ..models.errors import DbError
from ..services.project_service import ProjectService
from ..utils.logging_setup import get_logger

log = get_logger("console")

OPERATIONS = (
    "1) Add a project",
    "2) List projects",
    "3) Select a project",
    "4) Update project details",
    "5) Delete a project",
)

EXIT_SELECTION = -1

_STRICT_SCALE = Context(traps=[Inexact, InvalidOperation])


@dataclass(frozen=True)
class MenuState:
    current_project: Optional[Project] = None
    done: bool = False


class ProjectsApp:
    def __init__(
        self,
        service: ProjectService,
        input_fn: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
    ):
        self._service = service
        self._input = input_fn
        self._out = output

    # ---------- loop ----------

    def run(self, state: Optional[MenuState] = None) -> MenuState:
        """Repeat until the user exits; no single failure stops the loop."""
        state = state or MenuState()
        while not state.done:
            try:
                selection = self.get_user_selection(state)
                state = self.process_selection(selection, state)
            except EOFError:
                state = self.exit_menu(state)
            except Exception as exc:
                log.debug("Menu iteration failed", exc_info=True)
                self._out(f"\nError: {exc} Try again.")
        return state

    def process_selection(self, selection: int, state: MenuState) -> MenuState:
        if selection == EXIT_SELECTION:
            return self.exit_menu(state)
        if selection == 1:
            self.create_project()
            return state
        if selection == 2:
            self.list_projects()
            return state
        if selection == 3:
            return self.select_project(state)
        if selection == 4:
            return self.update_project_details(state)
        if selection == 5:
            return self.delete_project(state)
        self._out(f"\n{selection} is not a valid selection. Try again.")
        return state

    # ---------- operations ----------

    def create_project(self) -> Project:
        name = self.get_string_input("Enter the project name")
        estimated_hours = self.get_decimal_input("Enter the estimated hours")
        actual_hours = self.get_decimal_input("Enter the actual hours")
        difficulty = self.get_int_input("Enter the project difficulty (1-5)")
        notes = self.get_string_input("Enter the project notes")

        check_difficulty(difficulty)

        project = Project(
            id=None,
            name=name,
            estimated_hours=estimated_hours,
            actual_hours=actual_hours,
            difficulty=difficulty,
            notes=notes,
        )
        db_project = self._service.add_project(project)
        self._out(f"You have successfully created project: {db_project.summary()}")
        return db_project

    def list_projects(self) -> None:
        projects = self._service.fetch_all_projects()
        self._out("\nProjects:")
        for project in projects:
            self._out(f"   {project.summary()}")

    def select_project(self, state: MenuState) -> MenuState:
        self.list_projects()
        project_id = self.get_int_input("Enter a project ID to select a project")
        project = self._service.fetch_project_by_id(project_id)
        return replace(state, current_project=project)

    def update_project_details(self, state: MenuState) -> MenuState:
        current = state.current_project
        if current is None:
            self._out("\nPlease select a project.")
            return state

        name = self.get_string_input(f"Enter the project name [{current.name}]")
        estimated_hours = self.get_decimal_input(f"Enter the estimated hours [{current.estimated_hours}]")
        actual_hours = self.get_decimal_input(f"Enter the actual hours [{current.actual_hours}]")
        difficulty = self.get_int_input(f"Enter the project difficulty (1-5) [{current.difficulty}]")
        notes = self.get_string_input(f"Enter the project notes [{current.notes}]")

        project = Project(
            id=current.id,
            name=_keep(name, current.name),
            estimated_hours=_keep(estimated_hours, current.estimated_hours),
            actual_hours=_keep(actual_hours, current.actual_hours),
            difficulty=_keep(difficulty, current.difficulty),
            notes=_keep(notes, current.notes),
        )
        check_difficulty(project.difficulty)

        if not self._service.modify_project_details(project):
            raise DbError(f"Project with project ID={current.id} does not exist.")
        refreshed = self._service.fetch_project_by_id(current.id)
        self._out(f"Project {current.id} was updated.")
        return replace(state, current_project=refreshed)

    def delete_project(self, state: MenuState) -> MenuState:
        self.list_projects()
        project_id = self.get_int_input("Enter the ID of the project to delete")
        if not self._service.delete_project(project_id):
            raise DbError(f"Project with project ID={project_id} does not exist.")
        self._out(f"Project {project_id} was deleted successfully.")

        current = state.current_project
        if current is not None and current.id == project_id:
            return replace(state, current_project=None)
        return state

    def exit_menu(self, state: MenuState) -> MenuState:
        self._out("Exiting the menu.")
        return replace(state, done=True)

    # ---------- input ----------

    def get_user_selection(self, state: MenuState) -> int:
        self.print_operations(state)
        selection = self.get_int_input("Enter a menu selection")
        return EXIT_SELECTION if selection is None else selection

    def print_operations(self, state: MenuState) -> None:
        self._out("\nThese are the available selections. Press the Enter key to quit:")
        for line in OPERATIONS:
            self._out(f"  {line}")
        if state.current_project is None:
            self._out("\nYou are not working with a project.")
        else:
            self._out(f"\nYou are working with project:\n{state.current_project}")

    def get_string_input(self, prompt: str) -> Optional[str]:
        """Trimmed input, or None for a blank line."""
        value = self._input(f"{prompt}: ")
        return value.strip() or None

    def get_int_input(self, prompt: str) -> Optional[int]:
        value = self.get_string_input(prompt)
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            raise DbError(f"{value} is not a valid number.") from None

    def get_decimal_input(self, prompt: str) -> Optional[Decimal]:
        value = self.get_string_input(prompt)
        if value is None:
            return None
        return parse_hours(value)


def parse_hours(value: str) -> Decimal:
    """Decimal at exactly two fractional digits; anything finer is rejected."""
    try:
        number = Decimal(value)
        if not number.is_finite():
            raise InvalidOperation
        number = number.quantize(TWO_PLACES, context=_STRICT_SCALE)
    except (InvalidOperation, Inexact):
        raise DbError(f"{value} is not a valid decimal number.") from None
    if abs(number) > MAX_DECIMAL:
        raise DbError(f"{value} is out of range. Enter a value up to {MAX_DECIMAL}.")
    return number


def check_difficulty(difficulty: Optional[int]) -> None:
    if not difficulty_is_valid(difficulty):
        raise DbError(f"{difficulty} is not a valid difficulty. Enter a value from 1 to 5.")


def _keep(new, old):
    return old if new is None else new
