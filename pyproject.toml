[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "echo-contract"
version = "0.4.0"
description = "Shared contract types for a plugin-based LLM orchestrator and its plugins"
requires-python = ">=3.10"
dependencies = []
keywords = ["plugins", "llm", "contract", "monitoring", "tools"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["echo_contract"]

[tool.pytest.ini_options]
addopts = "-ra"
