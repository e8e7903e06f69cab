[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cfglayout"
version = "0.1.0"
description = "Layered grid layout for control flow graphs, with orthogonal edge routing and layout compaction"
requires-python = ">=3.10"
dependencies = []
keywords = ["graph", "layout", "control-flow-graph", "cfg", "edge-routing", "visualization"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cfglayout"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
