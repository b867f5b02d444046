[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "audiogenkit"
version = "0.1.0"
description = "Small toolkit for synthesising, shaping and learning audio signals with NumPy"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "audio",
    "synthesis",
    "sine",
    "reverb",
    "gan",
    "vae",
    "neural-network",
    "tagging",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
audiogenkit-semantic = "audiogenkit.semantic:main"

[tool.hatch.build.targets.wheel]
packages = ["audiogenkit"]

[tool.hatch.build.targets.sdist]
include = [
    "audiogenkit",
    "tests",
    "pyproject.toml",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
