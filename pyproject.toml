[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rtypeclient"
version = "0.1.0"
description = "Game-state core of a side-scrolling shoot-'em-up client: ECS, systems, stages, scenes and settings"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "ecs", "shoot-em-up", "side-scroller", "entity-component-system"]
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
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rtypeclient"]

[tool.pytest.ini_options]
addopts = "-ra"
