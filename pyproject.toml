[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "todo_api"
version = "0.1.0"
description = "A small HTTP service for managing TODO items stored in an SQL database"
requires-python = ">=3.10"
keywords = ["todo", "rest", "http", "api", "mysql", "starlette", "sqlalchemy"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: AsyncIO",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "sqlalchemy>=2.0",
    "starlette>=0.37",
    "uvicorn>=0.29",
    "python-dotenv>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=8.0",
    "httpx>=0.27",
]

[project.scripts]
todo-api = "todo_api.app:main"

[tool.hatch.build.targets.wheel]
packages = ["todo_api"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
