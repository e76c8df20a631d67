[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "microguard"
version = "0.1.0"
description = "Pure-Python building blocks of the WireGuard protocol: BLAKE2s, ChaCha20, Poly1305, X25519, key derivation and message formats"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "wireguard",
    "noise",
    "blake2s",
    "chacha20",
    "hchacha20",
    "poly1305",
    "x25519",
    "tai64n",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["microguard"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
