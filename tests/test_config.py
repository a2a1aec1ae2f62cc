"""Unit tests for Config and ProjectDefaults (springgen.config).

Tests cover:
- Config defaults and validation
- save/load (JSON and YAML)
- from_env
- with_overrides
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from pydantic import ValidationError

from springgen.config import Config, ProjectDefaults


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestConfigDefaults:
    @pytest.mark.unit
    def test_defaults(self):
        config = Config()
        assert config.base_url == "https://start.spring.io"
        assert config.timeout == 30
        assert config.metadata_accept == "application/vnd.initializr.v2.2+json"
        assert config.output_dir == Path(".")
        assert config.defaults == ProjectDefaults()

    @pytest.mark.unit
    def test_project_defaults_empty(self):
        defaults = ProjectDefaults()
        assert defaults.group_id is None
        assert defaults.java_version is None
        assert defaults.dependencies == []

    @pytest.mark.unit
    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            Config(timeout=0)

    @pytest.mark.unit
    def test_output_dir_coerced_to_path(self):
        config = Config(output_dir="/tmp/projects")
        assert config.output_dir == Path("/tmp/projects")


# ---------------------------------------------------------------------------
# save / load
# ---------------------------------------------------------------------------


class TestConfigSaveLoad:
    @pytest.mark.unit
    def test_save_and_load_roundtrip(self, tmp_path: Path):
        config = Config(
            base_url="http://localhost:8080",
            timeout=5,
            defaults=ProjectDefaults(group_id="com.acme", dependencies=["web"]),
        )
        path = config.save(tmp_path / "nested" / "springgen.json")

        assert path.exists()
        assert json.loads(path.read_text())["base_url"] == "http://localhost:8080"
        assert Config.load(path) == config

    @pytest.mark.unit
    def test_load_yaml(self, tmp_path: Path):
        path = tmp_path / "springgen.yaml"
        path.write_text(
            yaml.safe_dump(
                {
                    "timeout": 12,
                    "output_dir": "projects",
                    "defaults": {"language": "kotlin", "dependencies": ["web", "actuator"]},
                }
            )
        )
        config = Config.load(path)
        assert config.timeout == 12
        assert config.output_dir == Path("projects")
        assert config.defaults.language == "kotlin"
        assert config.defaults.dependencies == ["web", "actuator"]

    @pytest.mark.unit
    def test_load_empty_yaml(self, tmp_path: Path):
        path = tmp_path / "springgen.yml"
        path.write_text("")
        assert Config.load(path) == Config()

    @pytest.mark.unit
    def test_load_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            Config.load(tmp_path / "nope.json")

    @pytest.mark.unit
    def test_load_invalid_values(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"timeout": -1}))
        with pytest.raises(ValidationError):
            Config.load(path)

    @pytest.mark.unit
    def test_load_invalid_json(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ValueError):
            Config.load(path)


# ---------------------------------------------------------------------------
# from_env
# ---------------------------------------------------------------------------


class TestConfigFromEnv:
    @pytest.mark.unit
    def test_defaults_when_no_env(self):
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_env()
        assert config == Config()

    @pytest.mark.unit
    def test_connection_settings(self):
        env = {
            "SPRINGGEN_BASE_URL": "http://initializr.local",
            "SPRINGGEN_TIMEOUT": "45",
            "SPRINGGEN_OUTPUT_DIR": "/srv/projects",
        }
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_env()
        assert config.base_url == "http://initializr.local"
        assert config.timeout == 45
        assert config.output_dir == Path("/srv/projects")

    @pytest.mark.unit
    def test_project_defaults(self):
        env = {"SPRINGGEN_GROUP_ID": "org.acme", "SPRINGGEN_JAVA_VERSION": "21"}
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_env()
        assert config.defaults.group_id == "org.acme"
        assert config.defaults.java_version == "21"

    @pytest.mark.unit
    def test_bad_timeout(self):
        with patch.dict(os.environ, {"SPRINGGEN_TIMEOUT": "soon"}, clear=True):
            with pytest.raises(ValueError):
                Config.from_env()


# ---------------------------------------------------------------------------
# with_overrides
# ---------------------------------------------------------------------------


class TestWithOverrides:
    @pytest.mark.unit
    def test_none_values_ignored(self):
        config = Config(timeout=10).with_overrides(timeout=None, base_url=None)
        assert config.timeout == 10
        assert config.base_url == "https://start.spring.io"

    @pytest.mark.unit
    def test_values_applied(self):
        original = Config()
        config = original.with_overrides(timeout=3, output_dir=Path("/tmp/x"))
        assert config.timeout == 3
        assert config.output_dir == Path("/tmp/x")
        assert original.timeout == 30

    @pytest.mark.unit
    def test_overrides_validated(self):
        with pytest.raises(ValidationError):
            Config().with_overrides(timeout=0)

    @pytest.mark.unit
    def test_defaults_preserved(self):
        config = Config(defaults=ProjectDefaults(group_id="com.acme")).with_overrides(timeout=5)
        assert config.defaults.group_id == "com.acme"
