[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "accesskit"
version = "0.1.0"
description = "Building blocks for Access database front-ends: SQL statement state, a query shell, and CSV/SQL/JSON/C output formatting"
requires-python = ">=3.10"
dependencies = []
keywords = ["access", "mdb", "jet", "sql", "export", "csv", "json"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Front-Ends",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
accesskit-parsecsv = "accesskit.parsecsv:main"

[tool.hatch.build.targets.wheel]
packages = ["accesskit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
