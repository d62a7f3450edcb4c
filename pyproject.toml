[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "workloader"
version = "0.1.0"
description = "Workload export, import planning, IP list mapping and template listing for segmentation inventories kept as CSV."
requires-python = ">=3.10"
dependencies = []
keywords = ["workloads", "labels", "csv", "inventory", "segmentation", "ip-lists"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
workloader-template-list = "workloader.templates:main"

[tool.hatch.build.targets.wheel]
packages = ["workloader"]

[tool.pytest.ini_options]
addopts = "-ra"
