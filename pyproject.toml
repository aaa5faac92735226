[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "catflags"
version = "4.0.2"
description = "Feature flag and remote configuration client with polling, caching and user targeting"
requires-python = ">=3.10"
dependencies = [
    "semver",
]
keywords = [
    "feature flags",
    "feature toggles",
    "remote configuration",
    "rollout",
    "targeting",
    "polling",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["catflags"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
