"""
Tests for the toolchain register, list and remove commands.
"""

import json
import sys
from argparse import Namespace
from unittest.mock import patch

import pytest

from interpkit.cli.commands.toolchain import run_list, run_register, run_remove
from interpkit.cli.parser import CLI
from interpkit.core.exceptions import ExecutionError, ValidationError
from interpkit.core.platform import detect_platform
from interpkit.toolchain.version_key import VersionKey
from tests.mocks import FakeInspector


def register_args(path, name=None, config=None) -> Namespace:
    return Namespace(path=path, name=name, config=config)


def list_args(include_downloadable=False, fmt=None, config=None) -> Namespace:
    return Namespace(
        include_downloadable=include_downloadable, format=fmt, config=config
    )


def make_installation(toolchains_dir, name):
    if sys.platform == "win32":
        binary = toolchains_dir / name / "install" / "python.exe"
    else:
        binary = toolchains_dir / name / "install" / "bin" / "python3"
    binary.parent.mkdir(parents=True)
    binary.write_text("")
    return binary


@pytest.fixture
def inspector():
    """Replace subprocess inspection with a canned CPython 3.11.4 report."""
    fake = FakeInspector("CPython", "3.11.4", False)
    with patch(
        "interpkit.toolchain.registration.SubprocessInspector", return_value=fake
    ):
        yield fake


@pytest.fixture
def config_with_catalog(tmp_path):
    """Config file with a catalog for the current platform."""
    current = detect_platform()
    catalog = tmp_path / "catalog.yaml"
    catalog.write_text(
        f'- {{name: cpython, version: "3.12.0", os: {current.os}, '
        f"arch: {current.arch}}}\n"
        f'- {{name: cpython, version: "3.11.4", os: {current.os}, '
        f"arch: {current.arch}}}\n"
    )
    config = tmp_path / "config.yaml"
    config.write_text("catalog: catalog.yaml\n")
    return config


@pytest.mark.skipif(sys.platform == "win32", reason="Unix-specific test")
class TestRegisterCommand:
    """Test the register command."""

    def test_register(self, isolated_home, fake_interpreter, inspector, capsys):
        """Test registering an interpreter under its derived key."""
        result = run_register(register_args(fake_interpreter))

        assert result == 0
        link = isolated_home / "toolchains" / "cpython@3.11.4"
        assert link.is_symlink()
        out = capsys.readouterr().out
        assert f"Registered {fake_interpreter} as cpython@3.11.4" in out

    def test_register_with_name(self, isolated_home, fake_interpreter, inspector):
        """Test registering under a label."""
        assert run_register(register_args(fake_interpreter, name="custom")) == 0
        assert (isolated_home / "toolchains" / "custom@3.11.4").is_symlink()

    def test_register_conflict(
        self, isolated_home, fake_interpreter, inspector, capsys
    ):
        """Test that registering the same version twice fails."""
        assert run_register(register_args(fake_interpreter)) == 0
        capsys.readouterr()

        assert run_register(register_args(fake_interpreter)) == 1
        err = capsys.readouterr().err
        assert "ERROR: target Python path" in err
        assert "already in use" in err

    def test_register_not_python(self, isolated_home, fake_interpreter, capsys):
        """Test that a failing inspection is reported with exit code 1."""
        failing = FakeInspector(
            error=ExecutionError(
                "passed path does not appear to be a valid Python installation"
            )
        )
        with patch(
            "interpkit.toolchain.registration.SubprocessInspector",
            return_value=failing,
        ):
            result = run_register(register_args(fake_interpreter))

        assert result == 1
        assert "valid Python installation" in capsys.readouterr().err
        assert not (isolated_home / "toolchains").exists()

    def test_register_spawn_failure_reported_once(
        self, isolated_home, fake_interpreter, capsys
    ):
        """Test that a cause already in the message is not repeated."""
        cause = PermissionError(13, "Permission denied")
        error = ExecutionError(
            f"error executing interpreter to inspect version: {cause}"
        )
        error.__cause__ = cause
        with patch(
            "interpkit.toolchain.registration.SubprocessInspector",
            return_value=FakeInspector(error=error),
        ):
            result = run_register(register_args(fake_interpreter))

        assert result == 1
        err = capsys.readouterr().err
        assert err.count("Permission denied") == 1
        assert err.startswith("ERROR: error executing interpreter")

    def test_register_validation_cause_is_detailed(
        self, isolated_home, fake_interpreter, capsys
    ):
        """Test that a cause not in the message is shown as detail."""
        validation_error = ValidationError(VersionKey.parse("cpython@3.11.4"))
        validation_error.__cause__ = ValueError("only pypy is allowed")
        with patch(
            "interpkit.cli.commands.toolchain.register_toolchain",
            side_effect=validation_error,
        ):
            result = run_register(register_args(fake_interpreter))

        assert result == 1
        assert capsys.readouterr().err == (
            "ERROR: cpython@3.11.4 is not a valid toolchain\n"
            "  only pypy is allowed\n"
        )

    def test_register_through_cli(self, isolated_home, fake_interpreter, inspector):
        """Test the full command line."""
        cli = CLI()
        result = cli.run(["toolchain", "register", str(fake_interpreter)])

        assert result == 0
        assert (isolated_home / "toolchains" / "cpython@3.11.4").is_symlink()


class TestListCommand:
    """Test the list command."""

    def test_list_empty(self, isolated_home, capsys):
        """Test listing with nothing installed."""
        assert run_list(list_args()) == 0
        assert capsys.readouterr().out == ""

    def test_list_text(self, isolated_home, config_with_catalog, capsys):
        """Test the human-readable listing."""
        binary = make_installation(isolated_home / "toolchains", "cpython@3.11.4")

        result = run_list(
            list_args(include_downloadable=True, config=config_with_catalog)
        )

        assert result == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            f"cpython@3.11.4 ({binary})",
            "cpython@3.12.0 (downloadable)",
        ]

    def test_list_json(self, isolated_home, config_with_catalog, capsys):
        """Test the machine-readable listing."""
        binary = make_installation(isolated_home / "toolchains", "cpython@3.11.4")

        result = run_list(
            list_args(
                include_downloadable=True, fmt="json", config=config_with_catalog
            )
        )

        assert result == 0
        data = json.loads(capsys.readouterr().out)
        assert data == [
            {"name": "cpython@3.11.4", "path": str(binary)},
            {"name": "cpython@3.12.0", "downloadable": True},
        ]

    def test_list_without_downloadable(
        self, isolated_home, config_with_catalog, capsys
    ):
        """Test that catalog entries are hidden by default."""
        make_installation(isolated_home / "toolchains", "cpython@3.11.4")

        run_list(list_args(fmt="json", config=config_with_catalog))

        data = json.loads(capsys.readouterr().out)
        assert [item["name"] for item in data] == ["cpython@3.11.4"]

    def test_list_bad_config(self, isolated_home, tmp_path, capsys):
        """Test that a broken config is reported with exit code 1."""
        config = tmp_path / "config.yaml"
        config.write_text("catalog: [unclosed\n")

        assert run_list(list_args(config=config)) == 1
        assert "Invalid YAML" in capsys.readouterr().err


class TestRemoveCommand:
    """Test the remove command."""

    def test_remove_installation(self, isolated_home, capsys):
        """Test removing an installed toolchain."""
        toolchains = isolated_home / "toolchains"
        make_installation(toolchains, "cpython@3.12.1")

        result = run_remove(Namespace(version="cpython@3.12.1", config=None))

        assert result == 0
        assert not (toolchains / "cpython@3.12.1").exists()
        assert "Removed installed toolchain cpython@3.12.1" in capsys.readouterr().err

    def test_remove_shim(self, isolated_home, tmp_path, capsys):
        """Test removing a registered shim."""
        toolchains = isolated_home / "toolchains"
        toolchains.mkdir()
        (toolchains / "custom@3.11.4").write_text(str(tmp_path / "python3"))

        result = run_remove(Namespace(version="custom@3.11.4", config=None))

        assert result == 0
        assert not (toolchains / "custom@3.11.4").exists()
        assert "Removed toolchain link custom@3.11.4" in capsys.readouterr().err

    def test_remove_not_installed(self, isolated_home, capsys):
        """Test that removing an absent toolchain is not an error."""
        result = run_remove(Namespace(version="cpython@3.12.1", config=None))

        assert result == 0
        assert "Toolchain is not installed" in capsys.readouterr().err

    def test_remove_invalid_key(self, isolated_home, capsys):
        """Test that a malformed key fails with exit code 1."""
        result = run_remove(Namespace(version="cpython-3.12", config=None))

        assert result == 1
        assert "ERROR: invalid version key" in capsys.readouterr().err
