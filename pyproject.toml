[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jqtree"
version = "0.1.0"
description = "Syntax tree, backtracking stacks and type names for jq-style queries"
requires-python = ">=3.10"
dependencies = []
keywords = ["jq", "json", "query", "ast", "syntax-tree"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jqtree"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
