"""
Catalog of obtainable toolchains.

The catalog lists toolchains that can be fetched for a given operating system
and architecture. It is consulted only for presentation: obtainable entries
have no local path until an external fetch pipeline installs them.

Catalog files are YAML lists of records:

    - name: cpython
      version: "3.12.1"
      os: linux
      arch: x64
      url: https://example.invalid/cpython-3.12.1-linux-x64.tar.gz
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

import yaml

from interpkit.core.exceptions import ConfigurationError, ParseError
from interpkit.toolchain.version_key import VersionKey

logger = logging.getLogger(__name__)

_PBS_RELEASE = (
    "https://github.com/astral-sh/python-build-standalone/releases/download/20251031"
)
_PYPY_RELEASE = "https://downloads.python.org/pypy"

_TRIPLES = {
    ("linux", "x64"): "x86_64-unknown-linux-gnu",
    ("linux", "arm64"): "aarch64-unknown-linux-gnu",
    ("macos", "x64"): "x86_64-apple-darwin",
    ("macos", "arm64"): "aarch64-apple-darwin",
    ("windows", "x64"): "x86_64-pc-windows-msvc",
}

_PYPY_PLATFORMS = {
    ("linux", "x64"): "linux64",
    ("linux", "arm64"): "aarch64",
    ("macos", "x64"): "macos_x86_64",
    ("macos", "arm64"): "macos_arm64",
    ("windows", "x64"): "win64",
}


@dataclass(frozen=True)
class CatalogEntry:
    """An obtainable toolchain build for one platform."""

    name: str
    version: str
    os: str
    arch: str
    url: str = ""

    @property
    def key(self) -> VersionKey:
        return VersionKey.parse(f"{self.name}@{self.version}")

    def matches(self, os: str, arch: str) -> bool:
        return self.os == os and self.arch == arch


class ToolchainCatalog(ABC):
    """Abstract source of obtainable toolchains."""

    @abstractmethod
    def iter_obtainable(self, os: str, arch: str) -> Iterator[VersionKey]:
        """
        Yield keys of toolchains obtainable for a platform.

        Args:
            os: Normalized OS name ('linux', 'macos', 'windows')
            arch: Normalized architecture ('x64', 'arm64', ...)
        """
        ...


class StaticCatalog(ToolchainCatalog):
    """Catalog backed by a fixed list of entries."""

    def __init__(self, entries: Iterable[CatalogEntry]):
        self.entries: List[CatalogEntry] = list(entries)

    def iter_obtainable(self, os: str, arch: str) -> Iterator[VersionKey]:
        for entry in self.entries:
            if entry.matches(os, arch):
                yield entry.key


def _builtin_entries() -> Iterator[CatalogEntry]:
    for (os, arch), triple in _TRIPLES.items():
        for version in ("3.13.9", "3.12.12", "3.11.14", "3.10.19"):
            yield CatalogEntry(
                name="cpython",
                version=version,
                os=os,
                arch=arch,
                url=(
                    f"{_PBS_RELEASE}/cpython-{version}+20251031-"
                    f"{triple}-install_only.tar.gz"
                ),
            )
    for (os, arch), suffix in _PYPY_PLATFORMS.items():
        for version, release in (("3.11.13", "7.3.20"), ("3.10.16", "7.3.19")):
            ext = "zip" if os == "windows" else "tar.bz2"
            short = ".".join(version.split(".")[:2])
            yield CatalogEntry(
                name="pypy",
                version=version,
                os=os,
                arch=arch,
                url=f"{_PYPY_RELEASE}/pypy{short}-v{release}-{suffix}.{ext}",
            )


def default_catalog() -> StaticCatalog:
    """Get the built-in catalog of standalone CPython and PyPy builds."""
    return StaticCatalog(_builtin_entries())


def load_catalog_file(path: Path) -> StaticCatalog:
    """
    Load a catalog from a YAML file.

    Args:
        path: YAML file containing a list of catalog records

    Returns:
        StaticCatalog with the file's entries

    Raises:
        ConfigurationError: If the file is missing, malformed, or a record
            lacks a required field or has an invalid name/version
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read catalog file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in catalog file {path}: {e}") from e

    if data is None:
        data = []
    if not isinstance(data, list):
        raise ConfigurationError(f"Catalog file {path} must contain a list of entries")

    entries = []
    for index, record in enumerate(data):
        if not isinstance(record, dict):
            raise ConfigurationError(
                f"Catalog entry #{index} in {path} is not a mapping"
            )
        missing = [f for f in ("name", "version", "os", "arch") if f not in record]
        if missing:
            raise ConfigurationError(
                f"Catalog entry #{index} in {path} is missing: {', '.join(missing)}"
            )
        if not isinstance(record["version"], str):
            raise ConfigurationError(
                f"Catalog entry #{index} in {path}: version must be a string, "
                f"got {record['version']!r} (quote it in YAML)"
            )
        entry = CatalogEntry(
            name=str(record["name"]),
            version=record["version"],
            os=str(record["os"]),
            arch=str(record["arch"]),
            url=str(record.get("url", "")),
        )
        try:
            entry.key
        except ParseError as e:
            raise ConfigurationError(f"Catalog entry #{index} in {path}: {e}") from e
        entries.append(entry)

    logger.debug(f"Loaded {len(entries)} catalog entries from {path}")
    return StaticCatalog(entries)


def catalog_from_config(
    config: Optional[dict], base_dir: Optional[Path] = None
) -> ToolchainCatalog:
    """
    Build the catalog named by a configuration.

    Args:
        config: Loaded configuration; ``catalog`` names a YAML catalog file
        base_dir: Directory relative catalog paths resolve against
    """
    catalog_path = (config or {}).get("catalog")
    if not catalog_path:
        return default_catalog()
    path = Path(str(catalog_path)).expanduser()
    if not path.is_absolute() and base_dir is not None:
        path = base_dir / path
    return load_catalog_file(path)


__all__ = [
    "CatalogEntry",
    "ToolchainCatalog",
    "StaticCatalog",
    "default_catalog",
    "load_catalog_file",
    "catalog_from_config",
]
