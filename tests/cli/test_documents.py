"""Tests for the convert and inspect CLI commands."""

import json
import logging
import textwrap
import uuid

import pytest
import yaml
from click.testing import CliRunner

from versionedmodel.cli.main import cli
from versionedmodel.cli.utils.args import load_model_class

MODELS = textwrap.dedent('''
    from typing import Annotated, Optional

    from pydantic import BaseModel, Field

    from versionedmodel import SerializeToVersion, StepwiseConverter, versioned_model
    from versionedmodel.versioning import rename

    converter = StepwiseConverter(
        upgrades={"2.0": rename("name", "fullName")},
        downgrades={"2.0": rename("fullName", "name")},
    )


    @versioned_model(
        "2.0", to_current_converter=converter, to_target_converter=converter
    )
    class Person(BaseModel):
        full_name: str = Field(alias="fullName")
        write_as: Annotated[
            Optional[str],
            SerializeToVersion(default_to_source=True),
            Field(alias="writeAs"),
        ] = None


    @versioned_model("2.0", default_deserialize_version="1.0")
    class Legacy(BaseModel):
        name: str
''')


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """A directory holding a uniquely named models module, used as cwd."""
    module = f"cli_models_{uuid.uuid4().hex[:8]}"
    (tmp_path / f"{module}.py").write_text(MODELS)
    monkeypatch.chdir(tmp_path)
    return tmp_path, module


def _write(path, tree):
    path.write_text(json.dumps(tree))
    return str(path)


@pytest.mark.short
class TestConvert:
    """Test `versionedmodel convert`."""

    def test_convert_upgrades_to_current(self, workspace):
        tmp_path, module = workspace
        document = _write(tmp_path / "doc.json", {"modelVersion": "1.0", "name": "x"})

        result = CliRunner().invoke(
            cli, ["convert", document, "--model", f"{module}:Person", "--to", "2.0"]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"fullName": "x", "modelVersion": "2.0"}

    def test_convert_keeps_source_version_by_default(self, workspace):
        tmp_path, module = workspace
        document = _write(tmp_path / "doc.json", {"modelVersion": "1.0", "name": "x"})

        result = CliRunner().invoke(
            cli, ["convert", document, "-m", f"{module}:Person"]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"name": "x", "modelVersion": "1.0"}

    def test_convert_to_output_file_as_yaml(self, workspace):
        tmp_path, module = workspace
        document = _write(tmp_path / "doc.json", {"modelVersion": "2.0", "fullName": "x"})
        output = tmp_path / "out.yaml"

        result = CliRunner().invoke(
            cli,
            [
                "convert",
                document,
                "-m",
                f"{module}:Person",
                "--to",
                "1.0",
                "--format",
                "json",
                "-o",
                str(output),
            ],
        )

        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text()) == {"name": "x", "modelVersion": "1.0"}

    def test_convert_yaml_document(self, workspace):
        tmp_path, module = workspace
        document = tmp_path / "doc.yaml"
        document.write_text("modelVersion: '1.0'\nname: x\n")

        result = CliRunner().invoke(
            cli, ["convert", str(document), "-m", f"{module}:Person", "--to", "2.0"]
        )

        assert result.exit_code == 0, result.output
        assert yaml.safe_load(result.output) == {
            "fullName": "x",
            "modelVersion": "2.0",
        }

    def test_convert_missing_version(self, workspace):
        tmp_path, module = workspace
        document = _write(tmp_path / "doc.json", {"fullName": "x"})

        result = CliRunner().invoke(
            cli, ["convert", document, "-m", f"{module}:Person"]
        )

        assert result.exit_code == 1

    def test_convert_invalid_document(self, workspace):
        tmp_path, module = workspace
        document = _write(tmp_path / "doc.json", {"modelVersion": "2.0"})

        result = CliRunner().invoke(
            cli, ["convert", document, "-m", f"{module}:Person"]
        )

        assert result.exit_code == 1

    def test_convert_undecodable_document(self, workspace, caplog):
        tmp_path, module = workspace
        document = tmp_path / "doc.json"
        document.write_bytes(b'{"modelVersion": "2.0", "fullName": "\xff"}')

        result = CliRunner().invoke(
            cli, ["convert", str(document), "-m", f"{module}:Person"]
        )

        assert result.exit_code == 1
        assert "unable to parse json document" in caplog.text
        assert "does not match" not in caplog.text

    def test_convert_file_not_found(self, workspace):
        _, module = workspace

        result = CliRunner().invoke(
            cli, ["convert", "missing.json", "-m", f"{module}:Person"]
        )

        assert result.exit_code == 2
        assert "does not exist" in result.output.lower()

    def test_convert_bad_model_reference(self, workspace):
        tmp_path, _ = workspace
        document = _write(tmp_path / "doc.json", {"modelVersion": "1.0"})

        result = CliRunner().invoke(cli, ["convert", document, "-m", "no_colon"])

        assert result.exit_code == 2
        assert "module:ClassName" in result.output


@pytest.mark.short
class TestInspect:
    """Test `versionedmodel inspect`."""

    def test_inspect_old_document(self, workspace):
        tmp_path, module = workspace
        document = _write(tmp_path / "doc.json", {"modelVersion": "1.0", "name": "x"})

        result = CliRunner().invoke(
            cli, ["inspect", document, "-m", f"{module}:Person"]
        )

        assert result.exit_code == 0, result.output
        assert "Document version: 1.0" in result.output
        assert "Current version:  2.0" in result.output
        assert "Upgrade:          yes" in result.output

    def test_inspect_default_version(self, workspace):
        tmp_path, module = workspace
        document = _write(tmp_path / "doc.json", {"name": "x"})

        result = CliRunner().invoke(
            cli, ["inspect", document, "-m", f"{module}:Legacy"]
        )

        assert result.exit_code == 0, result.output
        assert "Document version: 1.0 (default)" in result.output
        # no converter configured
        assert "Upgrade:          no" in result.output

    def test_inspect_missing_version(self, workspace):
        tmp_path, module = workspace
        document = _write(tmp_path / "doc.json", {"fullName": "x"})

        result = CliRunner().invoke(
            cli, ["inspect", document, "-m", f"{module}:Person"]
        )

        assert result.exit_code == 1
        assert "<missing>" in result.output


@pytest.mark.short
class TestLoadModelClass:
    """Test resolving --model references."""

    def test_load(self, workspace):
        _, module = workspace
        assert load_model_class(f"{module}:Person").__name__ == "Person"

    def test_missing_module(self, workspace):
        import click

        with pytest.raises(click.BadParameter, match="cannot import module"):
            load_model_class("does_not_exist_anywhere:Person")

    def test_missing_class(self, workspace):
        import click

        _, module = workspace
        with pytest.raises(click.BadParameter, match="has no attribute"):
            load_model_class(f"{module}:Nobody")

    def test_not_a_class(self, workspace):
        import click

        _, module = workspace
        with pytest.raises(click.BadParameter, match="is not a class"):
            load_model_class(f"{module}:converter")


@pytest.fixture
def package_logger():
    """The package logger, restored to its level after the test."""
    logger = logging.getLogger("versionedmodel")
    level = logger.level
    yield logger
    logger.setLevel(level)


@pytest.mark.short
class TestDebugOption:
    """Test --debug on the group and on each command."""

    def test_debug_on_command(self, workspace, package_logger, caplog):
        tmp_path, module = workspace
        document = _write(tmp_path / "doc.json", {"modelVersion": "1.0", "name": "x"})

        result = CliRunner().invoke(
            cli, ["convert", document, "-m", f"{module}:Person", "--to", "2.0", "--debug"]
        )

        assert result.exit_code == 0, result.output
        assert package_logger.level == logging.DEBUG
        assert "Converting document from version 1.0 to 2.0" in caplog.text

    def test_debug_on_group_kept_for_command(self, workspace, package_logger):
        tmp_path, module = workspace
        document = _write(tmp_path / "doc.json", {"modelVersion": "1.0", "name": "x"})

        result = CliRunner().invoke(
            cli, ["--debug", "inspect", document, "-m", f"{module}:Person"]
        )

        assert result.exit_code == 0, result.output
        assert package_logger.level == logging.DEBUG

    def test_no_debug_by_default(self, workspace, package_logger):
        tmp_path, module = workspace
        document = _write(tmp_path / "doc.json", {"modelVersion": "1.0", "name": "x"})

        result = CliRunner().invoke(
            cli, ["inspect", document, "-m", f"{module}:Person"]
        )

        assert result.exit_code == 0, result.output
        assert package_logger.level == logging.INFO

    @pytest.mark.parametrize("command", ["convert", "inspect"])
    def test_debug_listed_in_help(self, command):
        result = CliRunner().invoke(cli, [command, "--help"])
        assert "--debug / --no-debug" in result.output
