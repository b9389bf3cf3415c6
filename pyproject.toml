[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "treehodlr"
version = "0.1.0"
description = "Hierarchical off-diagonal low-rank (HODLR) matrices stored as trees, with SVD compression and fast products"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["hodlr", "low-rank", "svd", "hierarchical matrices", "linear algebra"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
treehodlr-demo = "treehodlr.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["treehodlr"]

[tool.pytest.ini_options]
addopts = "-ra"
