#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Setup script for adams-bootstrap
"""

import sys
from pathlib import Path

try:
    from setuptools import find_packages, setup
except ImportError:
    print("Error: setuptools is required to install adams-bootstrap")
    print("Please install setuptools first: pip install setuptools")
    sys.exit(1)

# Determine the directory containing this setup.py file
here = Path(__file__).parent.absolute()


# Read version from __init__.py
def get_version():
    init_file = here / "src" / "adams_bootstrap" / "__init__.py"
    if init_file.exists():
        with open(init_file, "r", encoding="utf-8") as f:
            for line in f:
                if line.startswith("__version__"):
                    return line.split("=")[1].strip().strip('"').strip("'")
    return "0.1.0"


# Read the README file
def get_long_description():
    readme_file = here / "README.md"
    if readme_file.exists():
        with open(readme_file, "r", encoding="utf-8") as f:
            return f.read()
    return ""


# Core dependencies
INSTALL_REQUIRES = [
    "PyYAML>=6.0",
    "pydantic>=2.0,<3.0",
    "httpx>=0.24.0",
    "Jinja2>=3.0.0",
    "tqdm>=4.60.0",
]

# Optional dependencies
EXTRAS_REQUIRE = {
    "dev": [
        "pytest>=8.2.1",
        "pytest-cov>=5.0.0",
        "pytest-mock>=3.12.0",
        "black>=23.0.0",
        "isort>=5.12.0",
        "flake8>=6.0.0",
        "mypy>=1.5.0",
    ],
}
EXTRAS_REQUIRE["test"] = EXTRAS_REQUIRE["dev"][:3]

setup(
    name="adams-bootstrap",
    version=get_version(),
    description="Bootstraps ADAMS applications from Maven-hosted modules",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    license="GPL-3.0-or-later",
    # Package discovery
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    # Include data files
    include_package_data=True,
    package_data={
        "adams_bootstrap.templates": ["*.xml"],
    },
    # Dependencies
    python_requires=">=3.10.0",
    install_requires=INSTALL_REQUIRES,
    extras_require=EXTRAS_REQUIRE,
    # Entry points
    entry_points={
        "console_scripts": [
            "adams-bootstrap=adams_bootstrap.cli:main",
        ],
    },
    # Classification
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
        "Topic :: Software Development :: Build Tools",
    ],
    keywords=[
        "adams",
        "maven",
        "bootstrap",
        "java",
    ],
    # Build options
    zip_safe=False,
)
