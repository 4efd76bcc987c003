"""
Pytest configuration and shared fixtures for InterpKit tests.
"""

import pytest
from pathlib import Path

from interpkit.core.platform import PlatformInfo
from interpkit.toolchain.catalog import CatalogEntry, StaticCatalog
from interpkit.toolchain.registry import ToolchainRegistry
from tests.mocks import FakeInspector


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as fast unit tests")
    config.addinivalue_line(
        "markers",
        "integration: marks tests that run a real interpreter subprocess",
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch) -> Path:
    """Point INTERPKIT_HOME at an empty temporary directory."""
    home = tmp_path / "interpkit-home"
    home.mkdir()
    monkeypatch.setenv("INTERPKIT_HOME", str(home))
    return home


@pytest.fixture
def toolchains_dir(tmp_path: Path) -> Path:
    """Create an empty canonical toolchain root."""
    path = tmp_path / "toolchains"
    path.mkdir()
    return path


@pytest.fixture
def platform_linux() -> PlatformInfo:
    """Linux x64 platform."""
    return PlatformInfo(os="linux", arch="x64")


@pytest.fixture
def platform_windows() -> PlatformInfo:
    """Windows x64 platform."""
    return PlatformInfo(os="windows", arch="x64")


@pytest.fixture
def sample_catalog() -> StaticCatalog:
    """Small catalog with entries for two platforms."""
    return StaticCatalog(
        [
            CatalogEntry("cpython", "3.12.0", "linux", "x64"),
            CatalogEntry("cpython", "3.11.4", "linux", "x64"),
            CatalogEntry("pypy", "3.10.16", "linux", "x64"),
            CatalogEntry("cpython", "3.13.9", "macos", "arm64"),
        ]
    )


@pytest.fixture
def registry(toolchains_dir, sample_catalog, platform_linux) -> ToolchainRegistry:
    """Registry over an empty toolchain root on Linux x64."""
    return ToolchainRegistry(
        toolchains_dir, catalog=sample_catalog, platform=platform_linux
    )


@pytest.fixture
def fake_inspector() -> FakeInspector:
    """Inspector reporting a CPython 3.11.4 release build."""
    return FakeInspector("CPython", "3.11.4", False)


@pytest.fixture
def fake_interpreter(tmp_path: Path) -> Path:
    """An executable-looking file standing in for an interpreter binary."""
    path = tmp_path / "bin" / "python3.11"
    path.parent.mkdir(parents=True)
    path.write_text("#!/bin/sh\n")
    path.chmod(0o755)
    return path
