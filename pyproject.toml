[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "robotlink"
version = "0.1.0"
description = "Simple-message wire format and joint trajectory handling for industrial robot controllers"
requires-python = ">=3.10"
dependencies = []
keywords = ["robotics", "industrial", "trajectory", "protocol", "simple-message"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Manufacturing",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["robotlink"]

[tool.pytest.ini_options]
addopts = "-ra"
