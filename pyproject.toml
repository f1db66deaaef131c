[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "seiscoherence"
version = "1.0.0"
description = "Seismic volume tools: analysis windows, slice and sub-cube cutting, layer files, AGC, band-pass and trace interpolation"
requires-python = ">=3.10"
keywords = [
    "seismic",
    "coherence",
    "geophysics",
    "agc",
    "bandpass",
    "interpolation",
    "gaussian-filter",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
    "Topic :: Scientific/Engineering :: Physics",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
se-coherence-cut-slice = "seiscoherence.cut:slice_main"
se-coherence-cut-cube = "seiscoherence.cut:cube_main"
se-layer-generator = "seiscoherence.layers:generator_main"
se-interpolation-2d = "seiscoherence.layers:interpolation_main"

[tool.hatch.build.targets.wheel]
packages = ["seiscoherence"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
