[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "passbook"
version = "0.1.0"
description = "A small file-based bank ledger: open accounts, record deposits and withdrawals, and print statements."
requires-python = ">=3.10"
dependencies = []
keywords = ["bank", "ledger", "accounting", "passbook", "transactions"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Accounting",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
passbook = "passbook.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["passbook"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
