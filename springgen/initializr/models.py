"""Pydantic v2 models for the Spring Initializr API.

Covers the subset of the ``/metadata/client`` document (v2.2 format) that
the prompt needs, and the ``ProjectRequest`` sent to ``/starter.zip``.
Each dependency's ``versionRange`` is parsed into a ``VersionInterval`` once,
when the metadata is validated.
"""

from __future__ import annotations

import logging
import re

from pydantic import BaseModel, ConfigDict, Field, model_validator

from springgen.versioning import SemanticVersion, VersionInterval, parse_interval

logger = logging.getLogger(__name__)

_PACKAGE_INVALID_RE = re.compile(r"[^0-9A-Za-z_.]")


# ---------------------------------------------------------------------------
# Metadata building blocks
# ---------------------------------------------------------------------------


class Option(BaseModel):
    """One selectable value (a language, a Java version, a packaging...)."""

    id: str = Field(..., description="Identifier sent back to the service")
    name: str = Field(..., description="Human-readable label")
    description: str = Field(default="")
    tags: dict[str, str] = Field(default_factory=dict)


class SingleSelect(BaseModel):
    """A single-select field with its default value."""

    type: str = Field(default="single-select")
    default: str = Field(default="")
    values: list[Option] = Field(default_factory=list)

    def ids(self) -> list[str]:
        return [option.id for option in self.values]


class TextField(BaseModel):
    """A free-text field with a default value."""

    type: str = Field(default="text")
    default: str = Field(default="")


class Dependency(BaseModel):
    """An add-on component and the Spring Boot versions it supports."""

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    id: str = Field(..., description="Dependency identifier, e.g. 'web'")
    name: str = Field(..., description="Display name, e.g. 'Spring Web'")
    description: str = Field(default="")
    version_range: str = Field(default="", alias="versionRange")
    group: str = Field(default="", description="Name of the category listing this dependency")
    compatibility: VersionInterval = Field(
        default_factory=VersionInterval.universal, exclude=True
    )

    @model_validator(mode="after")
    def _parse_version_range(self) -> "Dependency":
        outcome = parse_interval(self.version_range)
        if outcome.degraded:
            logger.warning(
                "Dependency %r has a malformed version range %r (%s); treating it leniently",
                self.id,
                self.version_range,
                "; ".join(outcome.issues),
            )
        self.compatibility = outcome.interval
        return self

    def supports(self, boot_version: SemanticVersion | str) -> bool:
        """Return ``True`` if this dependency works with ``boot_version``."""
        return self.compatibility.contains(boot_version)


class DependencyGroup(BaseModel):
    """A named category of dependencies ("Web", "SQL", ...)."""

    name: str
    values: list[Dependency] = Field(default_factory=list)

    @model_validator(mode="after")
    def _tag_members(self) -> "DependencyGroup":
        for dependency in self.values:
            if not dependency.group:
                dependency.group = self.name
        return self


class DependencyCatalogue(BaseModel):
    """The hierarchical multi-select listing every dependency."""

    type: str = Field(default="hierarchical-multi-select")
    values: list[DependencyGroup] = Field(default_factory=list)

    def all(self) -> list[Dependency]:
        """Every dependency in metadata order, flattened across groups."""
        return [dependency for group in self.values for dependency in group.values]

    def get(self, dependency_id: str) -> Dependency | None:
        for dependency in self.all():
            if dependency.id == dependency_id:
                return dependency
        return None


class Metadata(BaseModel):
    """The ``/metadata/client`` document."""

    model_config = ConfigDict(populate_by_name=True)

    dependencies: DependencyCatalogue = Field(default_factory=DependencyCatalogue)
    project_type: SingleSelect = Field(default_factory=SingleSelect, alias="type")
    packaging: SingleSelect = Field(default_factory=SingleSelect)
    java_version: SingleSelect = Field(default_factory=SingleSelect, alias="javaVersion")
    language: SingleSelect = Field(default_factory=SingleSelect)
    boot_version: SingleSelect = Field(default_factory=SingleSelect, alias="bootVersion")
    group_id: TextField = Field(default_factory=TextField, alias="groupId")
    artifact_id: TextField = Field(default_factory=TextField, alias="artifactId")
    name: TextField = Field(default_factory=TextField)
    description: TextField = Field(default_factory=TextField)
    package_name: TextField = Field(default_factory=TextField, alias="packageName")


# ---------------------------------------------------------------------------
# Project request
# ---------------------------------------------------------------------------


class ProjectRequest(BaseModel):
    """Everything the user chose, ready to post to ``/starter.zip``."""

    name: str = Field(default="")
    group_id: str = Field(default="")
    artifact_id: str = Field(default="")
    description: str = Field(default="")
    package_name: str = Field(default="")
    project_type: str = Field(default="")
    language: str = Field(default="")
    boot_version: str = Field(default="")
    packaging: str = Field(default="")
    java_version: str = Field(default="")
    dependencies: list[str] = Field(default_factory=list)

    def with_defaults(self, metadata: Metadata) -> "ProjectRequest":
        """Return a copy where blank text fields take the metadata defaults.

        A blank package name is derived from the (filled) group and artifact
        ids, falling back to the metadata default when nothing usable remains.
        """
        fallbacks = {
            "name": metadata.name.default,
            "group_id": metadata.group_id.default,
            "artifact_id": metadata.artifact_id.default,
            "description": metadata.description.default,
            "project_type": metadata.project_type.default,
            "language": metadata.language.default,
            "boot_version": metadata.boot_version.default,
            "packaging": metadata.packaging.default,
            "java_version": metadata.java_version.default,
        }
        updates = {
            key: value
            for key, value in fallbacks.items()
            if not getattr(self, key).strip() and value
        }
        filled = self.model_copy(update=updates)
        if not filled.package_name.strip():
            package_name = derive_package_name(filled.group_id, filled.artifact_id)
            filled = filled.model_copy(
                update={"package_name": package_name or metadata.package_name.default}
            )
        return filled

    def to_form(self) -> dict[str, str]:
        """Form fields understood by the ``/starter.zip`` endpoint."""
        form = {
            "name": self.name,
            "groupId": self.group_id,
            "artifactId": self.artifact_id,
            "description": self.description,
            "language": self.language,
            "javaVersion": self.java_version,
            "bootVersion": self.boot_version,
            "type": self.project_type,
            "packaging": self.packaging,
            "dependencies": ",".join(self.dependencies),
        }
        if self.package_name:
            form["packageName"] = self.package_name
        return form


def derive_package_name(group_id: str, artifact_id: str) -> str:
    """Build a Java package name from the group and artifact ids.

    Characters that are not valid in a package name (``-``, spaces...) are
    dropped and the result is lower-cased, e.g. ``com.acme`` + ``shop-api``
    gives ``com.acme.shopapi``.
    """
    parts = [part for part in (group_id.strip(), artifact_id.strip()) if part]
    joined = _PACKAGE_INVALID_RE.sub("", ".".join(parts)).lower()
    return ".".join(segment for segment in joined.split(".") if segment)
