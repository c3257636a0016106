[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fastbin"
version = "0.0.1"
description = "A binary manager that downloads and installs executables from URLs"
requires-python = ">=3.10"
keywords = ["binary", "installer", "package-manager", "cli", "archives"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Software Distribution",
    "Topic :: Utilities",
]
dependencies = [
    "requests",
    "tqdm",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
fastbin = "fastbin.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["fastbin"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
