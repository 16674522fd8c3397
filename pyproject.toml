[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "narr"
version = "0.1.0"
description = "HTML sanitizing, article extraction, feed discovery and feed-record helpers for a news reader"
requires-python = ">=3.10"
keywords = ["rss", "feed", "readability", "html-sanitizer", "date-parsing", "feed-discovery"]
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
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content :: News/Diary",
    "Topic :: Text Processing :: Markup :: HTML",
]
dependencies = [
    "html5lib",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
narr-versioninfo = "narr.versioninfo:main"

[tool.hatch.build.targets.wheel]
packages = ["narr"]

[tool.pytest.ini_options]
addopts = "-ra"
