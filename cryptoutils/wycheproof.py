"""Helpers for reading Wycheproof test vector files."""

from __future__ import annotations

import binascii
import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


class WycheproofError(ValueError):
    """Raised when Wycheproof data is missing or malformed."""


class CaseResult(enum.Enum):
    """Expected outcome of a Wycheproof test case."""

    VALID = "valid"
    INVALID = "invalid"
    ACCEPTABLE = "acceptable"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Suite:
    """Common fields of the top-level object of a Wycheproof file."""

    algorithm: str
    generator_version: str
    number_of_tests: int
    notes: dict[str, str]


@dataclass(frozen=True)
class Group:
    """Common fields of a test group."""

    group_type: str


@dataclass(frozen=True)
class Case:
    """Common fields of a test case."""

    case_id: int
    comment: str
    result: CaseResult
    flags: list[str] = field(default_factory=list)


@dataclass
class TestInfo:
    """Raw data of one test together with its description."""

    __test__ = False

    data: list[bytes]
    desc: str


def _field(obj: Mapping[str, Any], key: str, kind: type) -> Any:
    if not isinstance(obj, Mapping):
        raise WycheproofError("expected a JSON object")
    try:
        value = obj[key]
    except KeyError:
        raise WycheproofError(f"missing field `{key}`") from None
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise WycheproofError(f"field `{key}` must be of type {kind.__name__}")
    return value


def hex_field(value: Any) -> bytes:
    """Decode a hex string field."""
    if not isinstance(value, str):
        raise WycheproofError(f"invalid value {value!r}: hex data expected")
    try:
        return binascii.unhexlify(value)
    except (binascii.Error, ValueError):
        raise WycheproofError(f"invalid value {value!r}: hex data expected") from None


def parse_result(value: Any) -> CaseResult:
    """Parse the ``result`` field of a test case."""
    try:
        return CaseResult(value)
    except ValueError:
        raise WycheproofError(
            f"invalid value {value!r}: unexpected result value"
        ) from None


def parse_suite(obj: Mapping[str, Any]) -> Suite:
    """Read the common suite fields from a top-level object."""
    notes = _field(obj, "notes", Mapping)
    if not all(isinstance(k, str) and isinstance(v, str) for k, v in notes.items()):
        raise WycheproofError("field `notes` must map strings to strings")
    return Suite(
        algorithm=_field(obj, "algorithm", str),
        generator_version=_field(obj, "generatorVersion", str),
        number_of_tests=_field(obj, "numberOfTests", int),
        notes=dict(notes),
    )


def parse_group(obj: Mapping[str, Any]) -> Group:
    """Read the common group fields from a test group object."""
    return Group(group_type=_field(obj, "type", str))


def parse_case(obj: Mapping[str, Any]) -> Case:
    """Read the common case fields from a test case object."""
    flags = obj.get("flags", []) if isinstance(obj, Mapping) else []
    if not isinstance(flags, list) or not all(isinstance(f, str) for f in flags):
        raise WycheproofError("field `flags` must be a list of strings")
    return Case(
        case_id=_field(obj, "tcId", int),
        comment=_field(obj, "comment", str),
        result=parse_result(_field(obj, "result", str)),
        flags=list(flags),
    )


def case_result(case: Case) -> int:
    """Encode the case result as a byte: 1 for valid, 0 for invalid."""
    if case.result is CaseResult.INVALID:
        return 0
    if case.result is CaseResult.VALID:
        return 1
    raise WycheproofError(f"Unexpected case result {case.result}")


def load_data(wycheproof_dir: str | Path, filename: str) -> bytes:
    """Read a test vector file from the ``testvectors`` directory of a checkout."""
    path = Path(wycheproof_dir) / "testvectors" / filename
    try:
        return path.read_bytes()
    except OSError:
        raise WycheproofError(
            f"Test vector file {filename} not found at {str(path)!r}"
        ) from None


def description(suite: Suite, case: Case) -> str:
    """Build a one-line description of a test case."""
    return f"{suite.algorithm} case {case.case_id} [{case.result}] {case.comment}"