"""springgen configuration.

Typed configuration for the scaffolder. Settings use Pydantic v2 models so
they are validated at construction time and can be read from environment
variables or from a JSON/YAML file.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from springgen.initializr.client import DEFAULT_BASE_URL, METADATA_ACCEPT


class ProjectDefaults(BaseModel):
    """Answers pre-filled in the form instead of the service defaults."""

    group_id: str | None = Field(default=None)
    java_version: str | None = Field(default=None)
    language: str | None = Field(default=None)
    packaging: str | None = Field(default=None)
    dependencies: list[str] = Field(default_factory=list)


class Config(BaseModel):
    """Global springgen configuration.

    Created once by the CLI entry point and passed to the ``Scaffolder``.
    """

    base_url: str = Field(default=DEFAULT_BASE_URL, description="Initializr instance to use")
    timeout: int = Field(default=30, ge=1, description="Per-request timeout in seconds")
    metadata_accept: str = Field(default=METADATA_ACCEPT)
    output_dir: Path = Field(default=Path("."), description="Where the project folder is created")
    defaults: ProjectDefaults = Field(default_factory=ProjectDefaults)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration as JSON.

        Returns:
            The path written to.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a configuration file.

        ``.yaml`` / ``.yml`` files are read with PyYAML, anything else as JSON.

        Raises:
            FileNotFoundError: If ``path`` does not exist.
            pydantic.ValidationError: If the content is not a valid config.
        """
        file_path = Path(path)
        raw = file_path.read_text(encoding="utf-8")
        if file_path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(raw) or {}
        else:
            data = json.loads(raw)
        return cls.model_validate(data)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            SPRINGGEN_BASE_URL, SPRINGGEN_TIMEOUT, SPRINGGEN_OUTPUT_DIR,
            SPRINGGEN_GROUP_ID, SPRINGGEN_JAVA_VERSION.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SPRINGGEN_BASE_URL"):
            kwargs["base_url"] = os.environ["SPRINGGEN_BASE_URL"]
        if os.environ.get("SPRINGGEN_TIMEOUT"):
            kwargs["timeout"] = int(os.environ["SPRINGGEN_TIMEOUT"])
        if os.environ.get("SPRINGGEN_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["SPRINGGEN_OUTPUT_DIR"])

        defaults_kwargs: dict[str, Any] = {}
        if os.environ.get("SPRINGGEN_GROUP_ID"):
            defaults_kwargs["group_id"] = os.environ["SPRINGGEN_GROUP_ID"]
        if os.environ.get("SPRINGGEN_JAVA_VERSION"):
            defaults_kwargs["java_version"] = os.environ["SPRINGGEN_JAVA_VERSION"]

        return cls(defaults=ProjectDefaults(**defaults_kwargs), **kwargs)

    def with_overrides(self, **overrides: Any) -> "Config":
        """Return a validated copy with every non-``None`` override applied.

        Raises:
            pydantic.ValidationError: If an override is out of range.
        """
        updates = {key: value for key, value in overrides.items() if value is not None}
        return self.model_validate({**self.model_dump(), **updates})
