[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tinykeras"
version = "0.1.0"
description = "A small neural-network library with composable layers, backpropagation and optimisers on flat parameter vectors"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["neural-network", "machine-learning", "backpropagation", "mnist", "numpy"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tinykeras-mnist = "tinykeras.mnist:main"

[tool.hatch.build.targets.wheel]
packages = ["tinykeras"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
