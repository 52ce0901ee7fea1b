"""
Setup configuration for the docs-viewer package.

This script uses setuptools to package and distribute the docs-viewer
application. It also reads the requirements and long description directly
from external files for ease of maintenance.
"""
from setuptools import find_packages, setup

VERSION = "0.1.0"


def read_requirements():
    """
    Read requirements from requirements.txt file.
    """
    with open("requirements.txt", encoding="UTF-8") as file:
        return [line.strip() for line in file if line.strip() and not line.startswith("#")]


def get_long_description():
    """
    Read README.md file.
    """
    with open("README.md", encoding="utf8") as file:
        return file.read()


setup(
    name="docs-viewer",
    description="Browse a directory of Markdown files with a built-in renderer.",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    license="Apache Licence, Version 2.0",
    version=VERSION,
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"docs_viewer": ["templates/*.html"]},
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=read_requirements(),
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "docs-viewer=docs_viewer.cli:cli",
        ]
    },
)
