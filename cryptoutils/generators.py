"""Generators turning Wycheproof test suites into lists of raw test data.

Each generator takes the contents of a Wycheproof JSON file, the algorithm
name and a key size in bits (0 for all sizes), and returns one
:class:`~cryptoutils.wycheproof.TestInfo` per emitted test case.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Mapping
from typing import Any

from cryptoutils.wycheproof import (
    Case,
    CaseResult,
    Suite,
    TestInfo,
    WycheproofError,
    case_result,
    description,
    hex_field,
    parse_case,
    parse_group,
    parse_suite,
)

_NONCE_96 = 12 * 8
_NONCE_192 = 24 * 8
_CHACHA_KEY_SIZE = 256


def _load(data: bytes) -> Mapping[str, Any]:
    try:
        obj = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise WycheproofError(f"invalid JSON: {exc}") from exc
    if not isinstance(obj, Mapping):
        raise WycheproofError("expected a JSON object")
    return obj


def _get(obj: Any, key: str, kind: type = object) -> Any:
    if not isinstance(obj, Mapping):
        raise WycheproofError("expected a JSON object")
    try:
        value = obj[key]
    except KeyError:
        raise WycheproofError(f"missing field `{key}`") from None
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise WycheproofError(f"field `{key}` must be of type {kind.__name__}")
    return value


def _hex_fields(obj: Any, *names: str) -> dict[str, bytes]:
    return {name: hex_field(_get(obj, name)) for name in names}


def _groups(obj: Mapping[str, Any]) -> list[Any]:
    return _get(obj, "testGroups", list)


def _cases(group: Any, *hex_names: str) -> list[tuple[Case, dict[str, bytes]]]:
    return [
        (parse_case(test), _hex_fields(test, *hex_names))
        for test in _get(group, "tests", list)
    ]


def _load_suite(data: bytes, algorithm: str | None) -> tuple[Mapping[str, Any], Suite]:
    obj = _load(data)
    suite = parse_suite(obj)
    if algorithm is not None and suite.algorithm != algorithm:
        raise WycheproofError(
            f"algorithm mismatch: expected {algorithm!r}, found {suite.algorithm!r}"
        )
    return obj, suite


def _aead(data: bytes, algorithm: str, key_size: int, iv_size: int) -> list[TestInfo]:
    obj, suite = _load_suite(data, algorithm)
    groups = []
    for group in _groups(obj):
        parse_group(group)
        groups.append((
            _get(group, "ivSize", int),
            _get(group, "keySize", int),
            _get(group, "tagSize", int),
            _cases(group, "aad", "ct", "iv", "key", "msg", "tag"),
        ))

    infos = []
    for group_iv_size, group_key_size, _tag_size, cases in groups:
        for case, fields in cases:
            if key_size != 0 and group_key_size != key_size:
                continue
            if group_iv_size != iv_size:
                print(f" skipping tests for iv_size={group_iv_size}")
                continue
            infos.append(TestInfo(
                data=[
                    fields["key"],
                    fields["iv"],
                    fields["aad"],
                    fields["msg"],
                    fields["ct"] + fields["tag"],
                    bytes([case_result(case)]),
                ],
                desc=description(suite, case),
            ))
    return infos


def aes_gcm_generator(data: bytes, algorithm: str, key_size: int) -> list[TestInfo]:
    """AES-GCM style AEAD tests with 96-bit nonces."""
    return _aead(data, algorithm, key_size, _NONCE_96)


def chacha20_poly1305(data: bytes, algorithm: str, key_size: int) -> list[TestInfo]:
    """ChaCha20-Poly1305 tests: 256-bit keys, 96-bit nonces."""
    return _aead(data, algorithm, _CHACHA_KEY_SIZE, _NONCE_96)


def xchacha20_poly1305(data: bytes, algorithm: str, key_size: int) -> list[TestInfo]:
    """XChaCha20-Poly1305 tests: 256-bit keys, 192-bit nonces."""
    return _aead(data, algorithm, _CHACHA_KEY_SIZE, _NONCE_192)


def aes_siv_generator(data: bytes, algorithm: str, key_size: int) -> list[TestInfo]:
    """AES-SIV tests: key, associated data, message, ciphertext, result."""
    obj, suite = _load_suite(data, algorithm)
    groups = []
    for group in _groups(obj):
        parse_group(group)
        groups.append((
            _get(group, "keySize", int),
            _cases(group, "key", "aad", "msg", "ct"),
        ))

    infos = []
    for group_key_size, cases in groups:
        if key_size != 0 and group_key_size != key_size:
            continue
        for case, fields in cases:
            infos.append(TestInfo(
                data=[
                    fields["key"],
                    fields["aad"],
                    fields["msg"],
                    fields["ct"],
                    bytes([case_result(case)]),
                ],
                desc=description(suite, case),
            ))
    return infos


def ecdsa_generator(data: bytes, algorithm: str, key_size: int) -> list[TestInfo]:
    """ECDSA tests for the curve ``algorithm`` with SHA-256.

    Cases whose result is "acceptable" are left out.
    """
    obj, suite = _load_suite(data, None)
    groups = []
    for group in _groups(obj):
        parse_group(group)
        _get(group, "keyDer", str)
        _get(group, "keyPem", str)
        sha = _get(group, "sha", str)
        key = _get(group, "key", Mapping)
        curve = _get(key, "curve", str)
        _get(key, "type", str)
        point = _hex_fields(key, "wx", "wy")
        groups.append((curve, sha, point, _cases(group, "msg", "sig")))

    infos = []
    for curve, sha, point, cases in groups:
        if curve != algorithm:
            raise WycheproofError(
                f"curve mismatch: expected {algorithm!r}, found {curve!r}"
            )
        if sha != "SHA-256":
            raise WycheproofError(f"unexpected hash {sha!r}, expected 'SHA-256'")
        for case, fields in cases:
            if case.result is CaseResult.ACCEPTABLE:
                continue
            infos.append(TestInfo(
                data=[
                    point["wx"],
                    point["wy"],
                    fields["msg"],
                    fields["sig"],
                    bytes([case_result(case)]),
                ],
                desc=description(suite, case),
            ))
    return infos


def ed25519_generator(data: bytes, algorithm: str, key_size: int) -> list[TestInfo]:
    """Ed25519 tests: secret key, public key, message, signature, result."""
    obj, suite = _load_suite(data, algorithm)
    groups = []
    for group in _groups(obj):
        parse_group(group)
        _get(group, "keyDer", str)
        _get(group, "keyPem", str)
        key = _hex_fields(_get(group, "key", Mapping), "sk", "pk")
        groups.append((key, _cases(group, "msg", "sig")))

    infos = []
    for key, cases in groups:
        for case, fields in cases:
            infos.append(TestInfo(
                data=[
                    key["sk"],
                    key["pk"],
                    fields["msg"],
                    fields["sig"],
                    bytes([case_result(case)]),
                ],
                desc=description(suite, case),
            ))
    return infos


def hkdf_generator(data: bytes, algorithm: str, key_size: int) -> list[TestInfo]:
    """HKDF tests: IKM, salt, info, OKM.  Only valid cases are emitted."""
    obj, suite = _load_suite(data, algorithm)
    cases = []
    for group in _groups(obj):
        parse_group(group)
        _get(group, "keySize", int)
        for test in _get(group, "tests", list):
            case = parse_case(test)
            fields = _hex_fields(test, "ikm", "salt", "info", "okm")
            cases.append((case, fields, _get(test, "size", int)))

    infos = []
    for case, fields, size in cases:
        if case.result is not CaseResult.VALID:
            continue
        if len(fields["okm"]) != size:
            print(
                f"Skipping case {case.case_id} with size={size} "
                f"!= okm.len()={len(fields['okm'])}",
                file=sys.stderr,
            )
        infos.append(TestInfo(
            data=[fields["ikm"], fields["salt"], fields["info"], fields["okm"]],
            desc=description(suite, case),
        ))
    return infos


def mac_generator(data: bytes, algorithm: str, key_size: int) -> list[TestInfo]:
    """MAC tests: key, message, tag.  Only valid cases are emitted.

    The tag may be the MAC output truncated to the group's tag size.
    """
    obj, suite = _load_suite(data, algorithm)
    groups = []
    for group in _groups(obj):
        parse_group(group)
        groups.append((
            _get(group, "keySize", int),
            _get(group, "tagSize", int),
            _cases(group, "key", "msg", "tag"),
        ))

    infos = []
    for group_key_size, tag_size, cases in groups:
        for case, fields in cases:
            if key_size != 0 and group_key_size != key_size:
                continue
            if case.result is not CaseResult.VALID:
                continue
            if len(fields["key"]) * 8 != group_key_size:
                raise WycheproofError(
                    f"case {case.case_id}: key length does not match "
                    f"key size {group_key_size}"
                )
            if tag_size % 8:
                raise WycheproofError(
                    f"case {case.case_id}: tag size {tag_size} is not whole bytes"
                )
            infos.append(TestInfo(
                data=[fields["key"], fields["msg"], fields["tag"]],
                desc=description(suite, case),
            ))
    return infos