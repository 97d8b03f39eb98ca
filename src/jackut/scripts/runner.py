"""Line-based acceptance script runner for the facade."""

import inspect
import logging
import re
import shlex
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jackut.api.facade import Facade
from jackut.errors import Result, attempt

logger = logging.getLogger(__name__)

# Facade methods callable from a script
OPERATIONS = frozenset(
    name
    for name, member in inspect.getmembers(Facade, inspect.isfunction)
    if not name.startswith("_")
)

VARIABLE_PATTERN = re.compile(r"\$\{(\w+)\}")
ASSIGNMENT_PATTERN = re.compile(r"^(\w+)=(\w+)$")


class ScriptError(Exception):
    """Raised when a script line cannot be parsed or dispatched."""


@dataclass
class ScriptFailure:
    """A script line that did not behave as expected."""

    line_number: int
    line: str
    reason: str


@dataclass
class ScriptReport:
    """Outcome of running one script."""

    name: str
    passed: int = 0
    failures: list[ScriptFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def render(value: Any) -> str:
    """Stringify a facade return value the way scripts compare it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ScriptRunner:
    """Executes acceptance scripts against a Facade.

    Supported lines::

        # comment
        op key=value ...
        var=op key=value ...
        expect <value> op key=value ...
        expectError <message> op key=value ...

    Values may be double-quoted and may reference earlier variables as
    ``${var}``.
    """

    def __init__(self, facade: Facade) -> None:
        self.facade = facade
        self.variables: dict[str, str] = {}

    def run_file(self, path: Path | str) -> ScriptReport:
        path = Path(path)
        return self.run_lines(path.read_text(encoding="utf-8").splitlines(), name=str(path))

    def run_lines(self, lines: Iterable[str], name: str = "<script>") -> ScriptReport:
        report = ScriptReport(name=name)
        for number, raw in enumerate(lines, start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue

            try:
                reason = self.execute(line)
            except ScriptError as e:
                reason = str(e)

            if reason is None:
                report.passed += 1
            else:
                logger.warning("%s:%d: %s", name, number, reason)
                report.failures.append(ScriptFailure(number, line, reason))
        return report

    def execute(self, line: str) -> str | None:
        """Run a single line, returning a failure reason or None on success.

        Raises:
            ScriptError: If the line is malformed or names an unknown operation.
        """
        try:
            tokens = shlex.split(line)
        except ValueError as e:
            raise ScriptError(f"Malformed line: {e}") from e

        head = tokens[0]
        if head in ("expect", "expectError"):
            if len(tokens) < 3:
                raise ScriptError(f"{head} needs a value and an operation")
            expected = self._substitute(tokens[1])
            result = self._call(tokens[2], tokens[3:])
            if head == "expect":
                return self._check_value(expected, result)
            return self._check_error(expected, result)

        match = ASSIGNMENT_PATTERN.match(head)
        if match:
            variable, operation = match.groups()
            result = self._call(operation, tokens[1:])
            if not result.ok:
                return f"Unexpected error: {result.message}"
            self.variables[variable] = render(result.value)
            return None

        result = self._call(head, tokens[1:])
        if not result.ok:
            return f"Unexpected error: {result.message}"
        return None

    def _substitute(self, value: str) -> str:
        def replace(match: re.Match[str]) -> str:
            variable = match.group(1)
            if variable not in self.variables:
                raise ScriptError(f"Undefined variable: {variable}")
            return self.variables[variable]

        return VARIABLE_PATTERN.sub(replace, value)

    def _call(self, operation: str, arguments: list[str]) -> Result:
        if operation not in OPERATIONS:
            raise ScriptError(f"Unknown operation: {operation}")

        kwargs = {}
        for argument in arguments:
            key, sep, value = argument.partition("=")
            if not sep:
                raise ScriptError(f"Expected key=value, got: {argument}")
            kwargs[key] = self._substitute(value)

        method = getattr(self.facade, operation)
        try:
            inspect.signature(method).bind(**kwargs)
        except TypeError as e:
            raise ScriptError(f"Bad arguments for {operation}: {e}") from e

        return attempt(method, **kwargs)

    @staticmethod
    def _check_value(expected: str, result: Result) -> str | None:
        if not result.ok:
            return f"Expected {expected!r} but got error: {result.message}"
        actual = render(result.value)
        if actual != expected:
            return f"Expected {expected!r} but got {actual!r}"
        return None

    @staticmethod
    def _check_error(expected: str, result: Result) -> str | None:
        if result.ok:
            return f"Expected error {expected!r} but operation succeeded"
        if result.message != expected:
            return f"Expected error {expected!r} but got {result.message!r}"
        return None
