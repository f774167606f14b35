[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kplkit"
version = "0.1.0"
description = "Symbol table, code generator, assembler and stack-machine interpreter for the KPL teaching language"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "kpl",
    "compiler",
    "symbol-table",
    "code-generation",
    "stack-machine",
    "interpreter",
    "assembler",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
    "Topic :: Software Development :: Interpreters",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
kplwords = "kplkit.wordindex:main"
smc = "kplkit.assembler:main"
kplrun = "kplkit.vm:main"

[tool.hatch.build.targets.wheel]
packages = ["kplkit"]

[tool.pytest.ini_options]
addopts = "-ra"
