"""Pure builders for the choices offered by the interactive form.

Nothing here touches the terminal or the network: every function takes the
parsed metadata (or a piece of it) and returns a fresh list, so the form can
recompute its choices whenever the user changes the Boot version.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from springgen.versioning import InvalidVersionError, SemanticVersion

from .models import Dependency, Option, SingleSelect

logger = logging.getLogger(__name__)

PROJECT_FORMAT = "project"


@dataclass(frozen=True)
class Choice:
    """A label/value pair shown by the prompt."""

    label: str
    value: str
    selected: bool = False


def compute_offered_options(
    components: Iterable[Dependency],
    platform_version: SemanticVersion | str,
) -> list[Dependency]:
    """Return the components compatible with ``platform_version``.

    Order follows ``components``. When ``platform_version`` itself cannot be
    parsed nothing can be ruled out, so every component is offered.
    """
    components = list(components)
    try:
        version = (
            platform_version
            if isinstance(platform_version, SemanticVersion)
            else SemanticVersion.parse(platform_version)
        )
    except InvalidVersionError:
        logger.warning(
            "Cannot read platform version %r; offering all %d dependencies",
            platform_version,
            len(components),
        )
        return components
    return [component for component in components if component.supports(version)]


def select_choices(field: SingleSelect) -> list[Choice]:
    """Choices for a single-select field, with its default pre-selected."""
    return [
        Choice(label=option.name, value=option.id, selected=option.id == field.default)
        for option in field.values
    ]


def project_type_choices(field: SingleSelect) -> list[Choice]:
    """Choices for the project type, keeping only full project generators.

    Initializr also lists build-file-only types (``format == "build"``),
    which do not produce a zip.
    """
    return [
        Choice(label=option.name, value=option.id, selected=option.id == field.default)
        for option in field.values
        if _is_project(option)
    ]


def dependency_choices(
    components: Iterable[Dependency],
    platform_version: SemanticVersion | str,
) -> list[Choice]:
    """Choices for the dependency multi-select under ``platform_version``."""
    choices: list[Choice] = []
    for dependency in compute_offered_options(components, platform_version):
        label = dependency.name
        if dependency.group:
            label = f"{dependency.name} ({dependency.group})"
        choices.append(Choice(label=label, value=dependency.id))
    return choices


def default_choice(choices: list[Choice]) -> Choice | None:
    """The pre-selected choice, or the first one when none is marked."""
    for choice in choices:
        if choice.selected:
            return choice
    return choices[0] if choices else None


def _is_project(option: Option) -> bool:
    return option.tags.get("format") == PROJECT_FORMAT
