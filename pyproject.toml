[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cryptoutils"
version = "0.1.0"
description = "Small building blocks for cryptographic code: blob storage, block buffers, padding, GF(2^n) doubling, hex literals and test-vector conversion"
requires-python = ">=3.10"
dependencies = []
keywords = ["cryptography", "padding", "pkcs7", "vlq", "wycheproof", "test-vectors", "hex"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
blobby-convert = "cryptoutils.convert:main"
wycheproof2blb = "cryptoutils.wycheproof2blb:main"

[tool.hatch.build.targets.wheel]
packages = ["cryptoutils"]

[tool.pytest.ini_options]
addopts = "-ra"
