[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pdfcore"
version = "0.1.0"
description = "Low-level PDF object model, lexer, parser and cross-reference handling"
requires-python = ">=3.10"
dependencies = []
keywords = ["pdf", "parser", "lexer", "xref", "primitives"]
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
    "Topic :: File Formats",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pdfcore"]

[tool.pytest.ini_options]
addopts = "-ra"
