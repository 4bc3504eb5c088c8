[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oftkit"
version = "0.1.0"
description = "Omnichain fungible token accounting: message codecs, fee and dust handling, rate limiting and send bookkeeping"
requires-python = ">=3.10"
dependencies = []
keywords = ["oft", "omnichain", "token", "bridge", "fees", "rate-limit", "codec"]
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
    "Topic :: Office/Business :: Financial",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["oftkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
