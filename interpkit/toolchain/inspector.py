"""
Interpreter introspection.

The identity of a toolchain is never taken from a caller-supplied label or a
file path: it is re-derived by running the candidate binary with a fixed
inline script and parsing what the runtime reports about itself.

Example:
    >>> info = SubprocessInspector().inspect(Path("/usr/bin/python3"))
    >>> info.python_implementation, info.python_version, info.python_debug
    ('CPython', '3.12.1', False)
"""

import json
import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from interpkit.core.exceptions import ExecutionError, ParseError

logger = logging.getLogger(__name__)

INSPECT_SCRIPT = """
import json
import platform
import sysconfig
print(json.dumps({
    "python_implementation": platform.python_implementation(),
    "python_version": platform.python_version(),
    "python_debug": bool(sysconfig.get_config_var('Py_DEBUG')),
}))
"""

_FIELDS = {
    "python_implementation": str,
    "python_version": str,
    "python_debug": bool,
}


@dataclass(frozen=True)
class InspectInfo:
    """What an interpreter reports about itself."""

    python_implementation: str
    python_version: str
    python_debug: bool


def parse_inspect_output(output: Union[bytes, str]) -> InspectInfo:
    """
    Parse the stdout of the inspection script.

    Args:
        output: Raw standard output of the candidate interpreter

    Returns:
        Parsed InspectInfo

    Raises:
        ParseError: If the output is not a JSON object with exactly the three
            expected fields of the expected types
    """
    try:
        data = json.loads(output)
    except (ValueError, UnicodeDecodeError) as e:
        raise ParseError("could not parse interpreter output as json") from e

    if not isinstance(data, dict):
        raise ParseError("could not parse interpreter output as json: not an object")

    if set(data) != set(_FIELDS):
        raise ParseError(
            "could not parse interpreter output as json: "
            f"expected fields {sorted(_FIELDS)}, got {sorted(data)}"
        )

    for field_name, field_type in _FIELDS.items():
        if not isinstance(data[field_name], field_type):
            raise ParseError(
                "could not parse interpreter output as json: "
                f"'{field_name}' must be {field_type.__name__}"
            )

    return InspectInfo(**data)


class Inspector(ABC):
    """
    Abstract interface for interpreter introspection.

    The real implementation spawns the candidate binary; tests substitute an
    in-memory fake returning canned output.
    """

    @abstractmethod
    def inspect(self, path: Path) -> InspectInfo:
        """
        Ask the interpreter at path for its identity.

        Raises:
            ExecutionError: If the binary cannot be run or exits non-zero
            ParseError: If its output is malformed
        """
        ...


class SubprocessInspector(Inspector):
    """Runs the candidate interpreter with ``-c INSPECT_SCRIPT``."""

    def inspect(self, path: Path) -> InspectInfo:
        command = [str(path), "-c", INSPECT_SCRIPT]
        logger.debug(f"Inspecting interpreter: {path}")

        # No timeout: an unresponsive binary blocks the caller.
        try:
            result = subprocess.run(command, capture_output=True)
        except OSError as e:
            raise ExecutionError(
                f"error executing interpreter to inspect version: {e}"
            ) from e

        if result.returncode != 0:
            logger.debug(
                f"Inspection of {path} exited with {result.returncode}: "
                f"{result.stderr.decode(errors='replace').strip()}"
            )
            raise ExecutionError(
                "passed path does not appear to be a valid Python installation"
            )

        return parse_inspect_output(result.stdout)


__all__ = [
    "INSPECT_SCRIPT",
    "InspectInfo",
    "Inspector",
    "SubprocessInspector",
    "parse_inspect_output",
]
