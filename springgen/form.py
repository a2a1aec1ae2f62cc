"""Interactive form collecting a ``ProjectRequest``.

Questions are asked with ``rich.prompt`` in three groups: project
coordinates, platform choices, then dependencies. The dependency list is
rebuilt from ``compute_offered_options`` after the Boot version is chosen,
so only compatible dependencies are ever offered.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt

from springgen.archive import TargetExistsError, check_target_available
from springgen.config import ProjectDefaults
from springgen.initializr import (
    Choice,
    Metadata,
    ProjectRequest,
    default_choice,
    dependency_choices,
    project_type_choices,
    select_choices,
)
from springgen.utils import console as default_console

logger = logging.getLogger(__name__)

Validator = Callable[[str], "str | None"]


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


def validate_identifier(value: str) -> str | None:
    """Return an error message if ``value`` contains whitespace."""
    if " " in value.strip():
        return "should not contain space"
    return None


def validate_required(value: str) -> str | None:
    """Return an error message if ``value`` is blank or contains whitespace."""
    if not value.strip():
        return "should not be empty"
    return validate_identifier(value)


def validate_project_name(value: str, base_dir: str | Path | None = None) -> str | None:
    """Return an error message if ``value`` is not usable as a new directory."""
    error = validate_required(value)
    if error:
        return error
    try:
        check_target_available(value.strip(), base_dir)
    except TargetExistsError as exc:
        return str(exc)
    return None


def _prefer(choices: list[Choice], preferred: str | None) -> list[Choice]:
    """Move the pre-selection to ``preferred`` when it is one of the values."""
    if not preferred or preferred not in {choice.value for choice in choices}:
        return choices
    return [
        Choice(label=choice.label, value=choice.value, selected=choice.value == preferred)
        for choice in choices
    ]


def _match_choice(answer: str, choices: list[Choice]) -> Choice | None:
    answer = answer.strip()
    if answer.isdigit():
        index = int(answer) - 1
        if 0 <= index < len(choices):
            return choices[index]
        return None
    for choice in choices:
        if choice.value == answer:
            return choice
    return None


# ---------------------------------------------------------------------------
# Form
# ---------------------------------------------------------------------------


class ProjectForm:
    """Asks the user for every field of a ``ProjectRequest``.

    Attributes:
        metadata: Parsed Initializr metadata supplying choices and defaults.
        defaults: User preferences from the configuration file.
        base_dir: Directory the project will be created in.
    """

    def __init__(
        self,
        metadata: Metadata,
        defaults: ProjectDefaults | None = None,
        base_dir: str | Path | None = None,
        console: Console | None = None,
    ) -> None:
        self.metadata = metadata
        self.defaults = defaults or ProjectDefaults()
        self.base_dir = base_dir
        self.console = console or default_console

    # -- Public API --------------------------------------------------------

    def ask(self) -> ProjectRequest:
        """Run the whole form and return the completed request."""
        md = self.metadata

        name = self._ask_text(
            "Name of the project",
            md.name.default,
            lambda value: validate_project_name(value, self.base_dir),
        )
        group_id = self._ask_text(
            "Group Id", self.defaults.group_id or md.group_id.default, validate_required
        )
        artifact_id = self._ask_text(
            "Artifact Id", md.artifact_id.default or name, validate_required
        )
        description = self._ask_text(
            "Write a short description", md.description.default, None
        )

        language = self._ask_select(
            "Pick a language", _prefer(select_choices(md.language), self.defaults.language)
        )
        java_version = self._ask_select(
            "Java version", _prefer(select_choices(md.java_version), self.defaults.java_version)
        )
        boot_version = self._ask_select("Spring Boot version", select_choices(md.boot_version))
        project_type = self._ask_select("Type of the project", project_type_choices(md.project_type))
        packaging = self._ask_select(
            "Packaging type", _prefer(select_choices(md.packaging), self.defaults.packaging)
        )

        dependencies = self._ask_multi_select(
            "Add dependencies",
            dependency_choices(md.dependencies.all(), boot_version),
            preselected=self.defaults.dependencies,
        )

        return ProjectRequest(
            name=name,
            group_id=group_id,
            artifact_id=artifact_id,
            description=description,
            language=language,
            java_version=java_version,
            boot_version=boot_version,
            project_type=project_type,
            packaging=packaging,
            dependencies=dependencies,
        )

    # -- Prompt primitives -------------------------------------------------

    def _ask_text(self, title: str, default: str, validator: Validator | None) -> str:
        while True:
            answer = Prompt.ask(
                f"[bold]{title}[/bold]",
                default=default,
                show_default=bool(default),
                console=self.console,
            )
            answer = (answer or "").strip()
            error = validator(answer) if validator else None
            if error is None:
                return answer
            self.console.print(f"[bold red]{error}[/bold red]")

    def _ask_select(self, title: str, choices: list[Choice]) -> str:
        if not choices:
            logger.warning("No options available for %r", title)
            return ""

        default = default_choice(choices)
        self.console.print(f"[bold]{title}[/bold]")
        for index, choice in enumerate(choices, start=1):
            marker = "[magenta]>[/magenta]" if choice is default else " "
            self.console.print(f" {marker} {index:>2}. {choice.label}")

        while True:
            answer = Prompt.ask(
                "Choose", default=str(choices.index(default) + 1), console=self.console
            )
            picked = _match_choice(answer or "", choices)
            if picked is not None:
                return picked.value
            self.console.print(f"[bold red]'{answer}' is not one of the options[/bold red]")

    def _ask_multi_select(
        self,
        title: str,
        choices: list[Choice],
        preselected: list[str] | None = None,
    ) -> list[str]:
        if not choices:
            self.console.print(f"[dim]{title}: nothing available for this version[/dim]")
            return []

        offered = {choice.value for choice in choices}
        initial = [value for value in (preselected or []) if value in offered]
        dropped = [value for value in (preselected or []) if value not in offered]
        if dropped:
            logger.warning("Skipping configured dependencies not offered here: %s", ", ".join(dropped))

        self.console.print(f"[bold]{title}[/bold] [dim](comma-separated numbers or ids)[/dim]")
        for index, choice in enumerate(choices, start=1):
            self.console.print(f"   {index:>3}. {choice.label} [dim]{choice.value}[/dim]")

        while True:
            answer = Prompt.ask(
                "Dependencies",
                default=",".join(initial),
                show_default=bool(initial),
                console=self.console,
            )
            tokens = [token for token in (answer or "").replace(" ", ",").split(",") if token]
            picked: list[str] = []
            unknown: list[str] = []
            for token in tokens:
                choice = _match_choice(token, choices)
                if choice is None:
                    unknown.append(token)
                elif choice.value not in picked:
                    picked.append(choice.value)
            if not unknown:
                return picked
            self.console.print(f"[bold red]Unknown dependencies: {', '.join(unknown)}[/bold red]")
