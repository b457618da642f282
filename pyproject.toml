[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "llmmina"
version = "0.1.0"
description = "Canonical receipts, structured logs, shared configuration, runtime context and Solana account decoding for an agent-driven chain runtime"
requires-python = ">=3.11"
dependencies = []
keywords = ["blockchain", "receipts", "merkle", "solana", "configuration", "structured-logging"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["llmmina"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"
