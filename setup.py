"""
Setup script for sla-core

The library is pure Python on top of numpy and scipy, so installation is a
plain setuptools build of the ``src/sla`` package:

    pip install -e .            # editable install
    pip install -e .[test]      # with the test runner
"""

from pathlib import Path
from setuptools import setup, find_packages


# Read version from src/sla/__init__.py
def get_version():
    version_file = Path("src/sla/__init__.py")
    if version_file.exists():
        for line in version_file.read_text().splitlines():
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"').strip("'")
    return "0.1.0"


# Read long description from README
def get_long_description():
    readme = Path("README.md")
    if readme.exists():
        return readme.read_text(encoding="utf-8")
    return ""


setup(
    name="sla-core",
    version=get_version(),
    description="Sparse linear algebra: CSR, CSC and dense matrices with cross-format arithmetic",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "scipy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    zip_safe=False,
)
