[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "reconkit"
version = "0.1.0"
description = "Building blocks for DNS subdomain reconnaissance: name matching, IP range helpers, wildcard detection and graph export."
requires-python = ">=3.10"
dependencies = [
    "requests",
]
keywords = [
    "dns",
    "subdomain",
    "reconnaissance",
    "wildcard",
    "cidr",
    "graph",
    "gexf",
    "maltego",
    "graphviz",
    "d3",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Information Technology",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: Name Service (DNS)",
    "Topic :: Security",
    "Topic :: Scientific/Engineering :: Visualization",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["reconkit"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
