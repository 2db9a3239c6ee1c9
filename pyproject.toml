[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tunesink"
version = "0.1.0"
description = "Composable audio sample sources, filters, converters, queues, mixers and a playback sink"
requires-python = ">=3.10"
dependencies = []
keywords = ["audio", "samples", "resampling", "mixer", "queue", "sink", "pcm"]
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
    "Topic :: Multimedia :: Sound/Audio",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tunesink"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
