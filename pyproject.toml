[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bedrock_updater"
version = "0.1.0"
description = "Keep a Minecraft Bedrock dedicated server up to date, carrying worlds over to each new release"
requires-python = ">=3.10"
dependencies = []
keywords = ["minecraft", "bedrock", "dedicated-server", "updater"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bedrock-updater = "bedrock_updater.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["bedrock_updater"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
