"""Tests for input resolution."""

import os
from pathlib import Path

import pytest

from prlink.config import (
    build_scope,
    get_config_template,
    load_config,
    resolve_inputs,
    resolve_token,
    split_repository,
)
from prlink.context import ActionContext
from prlink.errors import ValidationError


def make_context(**kwargs) -> ActionContext:
    defaults = {
        "workflow": "Build",
        "run_id": 999,
        "repository": "ambient/repo",
        "workspace": "/home/runner/work/repo/repo",
    }
    defaults.update(kwargs)
    return ActionContext(**defaults)


class TestSplitRepository:
    def test_valid(self):
        assert split_repository("owner/repo") == ("owner", "repo")

    @pytest.mark.parametrize("value", ["invalidformat", "owner/", "/repo", "a/b/c", ""])
    def test_invalid(self, value):
        with pytest.raises(ValueError, match="Must be in format owner/repo"):
            split_repository(value)


class TestResolveInputs:
    def test_minimal(self):
        inputs = resolve_inputs({"name": "bin"}, make_context())

        assert inputs.name == "bin"
        assert inputs.description == ""
        assert inputs.path == "/home/runner/work/repo/repo"
        assert inputs.github_token == ""
        assert inputs.repository == ""
        assert inputs.run_id is None

    def test_action_input_names(self):
        inputs = resolve_inputs(
            {
                "name": "bin",
                "description": "Download",
                "github-token": "tok",
                "repository": "owner/repo",
                "run-id": "1234",
            },
            make_context(),
        )

        assert inputs.github_token == "tok"
        assert inputs.repository == "owner/repo"
        assert inputs.run_id == 1234

    def test_missing_name(self):
        with pytest.raises(ValidationError, match="Input required and not supplied: name"):
            resolve_inputs({"description": "x"}, make_context())

    def test_empty_name(self):
        with pytest.raises(ValidationError, match="Input required and not supplied: name"):
            resolve_inputs({"name": "  "}, make_context())

    def test_invalid_repository(self):
        with pytest.raises(ValidationError) as exc_info:
            resolve_inputs({"name": "bin", "repository": "invalidformat"}, make_context())
        assert str(exc_info.value) == "Invalid repository: 'invalidformat'. Must be in format owner/repo"

    def test_invalid_run_id(self):
        with pytest.raises(ValidationError, match="Invalid run-id: 'abc'"):
            resolve_inputs({"name": "bin", "run-id": "abc"}, make_context())

    def test_empty_run_id(self):
        inputs = resolve_inputs({"name": "bin", "run-id": ""}, make_context())
        assert inputs.run_id is None

    def test_none_values_ignored(self):
        inputs = resolve_inputs({"name": "bin", "description": None}, make_context())
        assert inputs.description == ""

    def test_path_falls_back_to_cwd(self):
        inputs = resolve_inputs({"name": "bin"}, make_context(workspace=None))
        assert inputs.path == os.getcwd()

    def test_path_expands_home(self):
        inputs = resolve_inputs({"name": "bin", "path": "~/build"}, make_context())
        assert inputs.path == os.path.expanduser("~") + "/build"
        assert inputs.resolved_path.is_absolute()

    def test_inputs_are_frozen(self):
        inputs = resolve_inputs({"name": "bin"}, make_context())
        with pytest.raises(Exception):
            inputs.name = "other"


class TestResolveToken:
    def test_env_token_wins(self):
        inputs = resolve_inputs({"name": "bin", "github-token": "input"}, make_context())
        assert resolve_token(inputs, make_context(token="env")) == "env"

    def test_input_token(self):
        inputs = resolve_inputs({"name": "bin", "github-token": "input"}, make_context())
        assert resolve_token(inputs, make_context()) == "input"

    def test_missing(self):
        inputs = resolve_inputs({"name": "bin", "repository": "owner/repo"}, make_context())
        with pytest.raises(ValidationError) as exc_info:
            resolve_token(inputs, make_context())
        assert str(exc_info.value) == "GitHub token is required"


class TestBuildScope:
    def test_with_token_uses_explicit_repository(self):
        inputs = resolve_inputs(
            {"name": "bin", "github-token": "tok", "repository": "owner/repo", "run-id": "5"},
            make_context(),
        )
        scope = build_scope(inputs, make_context())

        assert scope.repository_owner == "owner"
        assert scope.repository_name == "repo"
        assert scope.run_id == 5
        assert scope.token == "tok"

    def test_with_token_defaults_to_ambient(self):
        inputs = resolve_inputs({"name": "bin"}, make_context())
        scope = build_scope(inputs, make_context(token="env"))

        assert scope.full_name == "ambient/repo"
        assert scope.run_id == 999
        assert scope.token == "env"

    def test_without_token_uses_ambient(self):
        inputs = resolve_inputs({"name": "bin", "repository": "owner/repo", "run-id": "5"}, make_context())
        scope = build_scope(inputs, make_context())

        assert scope.full_name == "ambient/repo"
        assert scope.run_id == 999
        assert scope.token is None

    def test_other_repository_ignores_ambient_run(self):
        inputs = resolve_inputs({"name": "bin", "github-token": "t", "repository": "other/project"}, make_context())
        scope = build_scope(inputs, make_context())

        assert scope.full_name == "other/project"
        assert scope.run_id is None

    def test_ambient_repository_named_explicitly_keeps_ambient_run(self):
        inputs = resolve_inputs({"name": "bin", "github-token": "t", "repository": "ambient/repo"}, make_context())
        scope = build_scope(inputs, make_context())

        assert scope.run_id == 999

    def test_with_token_and_no_repository(self):
        inputs = resolve_inputs({"name": "bin", "github-token": "tok"}, make_context())
        with pytest.raises(ValidationError, match="Invalid repository"):
            build_scope(inputs, make_context(repository=None))


class TestConfigFile:
    def test_template_loads(self, tmp_path: Path):
        config_file = tmp_path / "prlink.yaml"
        config_file.write_text(get_config_template())

        data = load_config(config_file)

        assert data["name"] == "my-artifact"
        assert data["description"] == "Download my-artifact"

    def test_load_full_config(self, tmp_path: Path):
        config_file = tmp_path / "prlink.yaml"
        config_file.write_text(
            """
name: bin
description: Download
repository: owner/repo
run-id: 42
github-token: tok
"""
        )

        inputs = resolve_inputs(load_config(config_file), make_context())

        assert inputs.run_id == 42
        assert inputs.repository == "owner/repo"

    def test_unknown_key(self, tmp_path: Path):
        config_file = tmp_path / "prlink.yaml"
        config_file.write_text("name: bin\npattern: '*'\n")

        with pytest.raises(ValidationError, match="Unknown config keys"):
            load_config(config_file)

    def test_malformed_yaml(self, tmp_path: Path):
        config_file = tmp_path / "prlink.yaml"
        config_file.write_text("name: [unclosed\n")

        with pytest.raises(ValidationError, match="Invalid config file"):
            load_config(config_file)

    def test_directory(self, tmp_path: Path):
        with pytest.raises(ValidationError, match="Cannot read config file"):
            load_config(tmp_path)

    def test_not_a_mapping(self, tmp_path: Path):
        config_file = tmp_path / "prlink.yaml"
        config_file.write_text("- a\n- b\n")

        with pytest.raises(ValidationError, match="expected a mapping"):
            load_config(config_file)
