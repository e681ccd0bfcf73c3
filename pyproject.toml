[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "appservice"
version = "0.1.0"
description = "Devfile detection, devfile generation and GitOps repository helpers for application services"
requires-python = ">=3.10"
keywords = ["devfile", "dockerfile", "gitops", "github", "component-detection"]
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
    "Topic :: Software Development :: Build Tools",
]
dependencies = [
    "pyyaml",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["appservice"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
