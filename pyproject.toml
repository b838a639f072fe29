[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mqt"
version = "0.1.0"
description = "A small quantitative trading toolkit: stock screener data models, portfolios, strategies, an HTTP API server and an interactive client."
requires-python = ">=3.10"
keywords = ["trading", "portfolio", "stocks", "backtest", "strategy", "screener", "ntfy"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Financial and Insurance Industry",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: Flask",
    "Topic :: Office/Business :: Financial :: Investment",
]
dependencies = [
    "flask",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
mqt-server = "mqt.app:main"
mqt-client = "mqt.client:main"

[tool.hatch.build.targets.wheel]
packages = ["mqt"]

[tool.pytest.ini_options]
addopts = "-ra"
