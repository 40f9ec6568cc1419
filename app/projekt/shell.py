"""
Interactive console menu for projects.

1. Lista alla projekt
2. Skapa nytt projekt
3. Editera/uppdatera projekt
4. Avsluta

Storage failures are not handled here; they propagate to main(), which logs
them and exits non-zero.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable

from dotenv import load_dotenv

from app.projekt import build_services, configure_logging
from app.projekt.config import load_settings
from app.projekt.db import StorageError
from app.projekt.modules.projects.models import Project
from app.projekt.modules.projects.service import ProjectService

logger = logging.getLogger(__name__)

MENU = (
    "Välj alternativ:",
    "1. Lista alla projekt",
    "2. Skapa nytt projekt",
    "3. Editera/uppdatera projekt",
    "4. Avsluta",
)
PROMPT = "Ditt val: "
UNKNOWN_CUSTOMER = "Okänd"


INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1


class InputFormatError(ValueError):
    pass


def parse_id(raw: str | None) -> int:
    """Parse a 32-bit signed integer id; anything else is an InputFormatError."""
    try:
        value = int((raw or "").strip())
    except ValueError:
        raise InputFormatError(f"Not an integer id: {raw!r}") from None
    if not INT32_MIN <= value <= INT32_MAX:
        raise InputFormatError(f"Id out of range: {raw!r}")
    return value


def format_project(project: Project) -> str:
    customer_name = project.customer.name if project.customer is not None else UNKNOWN_CUSTOMER
    return f"ID: {project.id}, Namn: {project.name}, Kund: {customer_name}"


class Shell:
    def __init__(
        self,
        projects: ProjectService,
        *,
        read: Callable[[], str] = input,
        write: Callable[[str], None] | None = None,
    ) -> None:
        self.projects = projects
        self._read = read
        self._write = write or _stdout_write

    def _print(self, text: str = "") -> None:
        self._write(text + "\n")

    def _ask(self, prompt: str) -> str:
        self._write(prompt)
        return self._read()

    def list_projects(self) -> None:
        self._print("Projektlista:")
        for project in self.projects.get_all_projects():
            self._print(format_project(project))

    def create_project(self) -> None:
        project_name = self._ask("Ange projektnamn: ")
        customer_name = self._ask("Ange kundnamn: ")
        self.projects.create_project(project_name, customer_name)
        self._print("Projekt skapat.")

    def update_project(self) -> None:
        try:
            project_id = parse_id(self._ask("Ange projektets ID att uppdatera: "))
        except InputFormatError as e:
            logger.debug("%s", e)
            self._print("Felaktigt ID.")
            return
        new_name = self._ask("Ange nytt projektnamn: ")
        if self.projects.update_project(project_id, new_name):
            self._print("Projekt uppdaterat.")
        else:
            self._print("Projektet hittades inte.")

    def run(self) -> None:
        actions: dict[str, Callable[[], None]] = {
            "1": self.list_projects,
            "2": self.create_project,
            "3": self.update_project,
        }
        while True:
            for line in MENU:
                self._print(line)
            try:
                choice = self._ask(PROMPT)
            except EOFError:
                self._print()
                return
            self._print()

            if choice == "4":
                self._print()
                return
            action = actions.get(choice)
            if action is None:
                self._print("Ogiltigt val.")
            else:
                try:
                    action()
                except EOFError:
                    self._print()
                    return
            self._print()


def _stdout_write(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def main() -> None:
    load_dotenv()
    settings = load_settings()
    configure_logging(settings)

    try:
        services = build_services(settings)
    except StorageError:
        logger.exception("Could not open the database")
        sys.exit(1)

    try:
        Shell(services.projects).run()
    except StorageError:
        logger.exception("Unrecoverable storage failure")
        sys.exit(1)
    finally:
        services.close()


if __name__ == "__main__":
    main()
