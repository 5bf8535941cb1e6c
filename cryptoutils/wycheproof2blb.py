"""Convert Wycheproof test vectors into blobby files with descriptions."""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from cryptoutils import generators
from cryptoutils.blobby import encode_blobs
from cryptoutils.wycheproof import TestInfo, WycheproofError, load_data

Generator = Callable[[bytes, str, int], "list[TestInfo]"]

_MAX_KEY_SIZE = 2**32 - 1


@dataclass(frozen=True)
class Algorithm:
    """A Wycheproof test vector file and the generator that reads it."""

    file: str
    generator: Generator


_ALGORITHMS: dict[str, Algorithm] = {
    "AES-GCM": Algorithm("aes_gcm_test.json", generators.aes_gcm_generator),
    "AES-GCM-SIV": Algorithm("aes_gcm_siv_test.json", generators.aes_gcm_generator),
    "CHACHA20-POLY1305": Algorithm(
        "chacha20_poly1305_test.json", generators.chacha20_poly1305
    ),
    "XCHACHA20-POLY1305": Algorithm(
        "xchacha20_poly1305_test.json", generators.xchacha20_poly1305
    ),
    "AES-SIV-CMAC": Algorithm("aes_siv_cmac_test.json", generators.aes_siv_generator),
    "AES-CMAC": Algorithm("aes_cmac_test.json", generators.mac_generator),
    "HKDF-SHA-1": Algorithm("hkdf_sha1_test.json", generators.hkdf_generator),
    "HKDF-SHA-256": Algorithm("hkdf_sha256_test.json", generators.hkdf_generator),
    "HKDF-SHA-384": Algorithm("hkdf_sha384_test.json", generators.hkdf_generator),
    "HKDF-SHA-512": Algorithm("hkdf_sha512_test.json", generators.hkdf_generator),
    "HMACSHA1": Algorithm("hmac_sha1_test.json", generators.mac_generator),
    "HMACSHA224": Algorithm("hmac_sha224_test.json", generators.mac_generator),
    "HMACSHA256": Algorithm("hmac_sha256_test.json", generators.mac_generator),
    "HMACSHA384": Algorithm("hmac_sha384_test.json", generators.mac_generator),
    "HMACSHA512": Algorithm("hmac_sha512_test.json", generators.mac_generator),
    "EDDSA": Algorithm("eddsa_test.json", generators.ed25519_generator),
    "secp256r1": Algorithm(
        "ecdsa_secp256r1_sha256_test.json", generators.ecdsa_generator
    ),
    "secp256k1": Algorithm(
        "ecdsa_secp256k1_sha256_test.json", generators.ecdsa_generator
    ),
}


def find_algorithm(name: str) -> Algorithm:
    """Return the test file and generator for the algorithm family ``name``."""
    try:
        return _ALGORITHMS[name]
    except KeyError:
        raise WycheproofError(f"Unrecognized algorithm '{name}'") from None


def convert(
    wycheproof_dir: str | Path,
    algorithm: str,
    key_size: int,
    out_path: str | Path,
    descriptions_path: str | Path,
) -> int:
    """Write the blobby file and the descriptions file for ``algorithm``.

    Returns the number of test cases emitted.
    """
    algo = find_algorithm(algorithm)
    data = load_data(wycheproof_dir, algo.file)
    infos = algo.generator(data, algorithm, key_size)
    print(f"Emitting {len(infos)} test cases")

    with open(descriptions_path, "w", encoding="utf-8") as txt_file:
        for info in infos:
            txt_file.write(f"{info.desc}\n")

    blobs = [blob for info in infos for blob in info.data]
    blb_data, _ = encode_blobs(blobs)
    Path(out_path).write_bytes(blb_data)
    return len(infos)


_ARGUMENTS = (
    "Provide directory with wycheproof vectors",
    "Provide algorithm family",
    "Provide key size in bits, or 0 for all sizes",
    "Provide path for output blobby file",
    "Provide path for descriptions file",
)


def main(argv: list[str] | None = None) -> int:
    """Run ``wycheproof2blb DIR ALGORITHM KEY_SIZE OUT DESCRIPTIONS``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < len(_ARGUMENTS):
        print(_ARGUMENTS[len(args)], file=sys.stderr)
        return 2
    wycheproof_dir, algorithm, key_size_text, out_path, descriptions_path = args[:5]
    try:
        key_size = int(key_size_text)
    except ValueError:
        key_size = -1
    if not 0 <= key_size <= _MAX_KEY_SIZE:
        print("Key size needs to be a number of bits", file=sys.stderr)
        return 2
    try:
        convert(wycheproof_dir, algorithm, key_size, out_path, descriptions_path)
    except (WycheproofError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())