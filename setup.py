#!/usr/bin/env python3

import pathlib

from setuptools import find_packages, setup

# The directory containing this file
HERE = pathlib.Path(__file__).parent

# The text of the README file
README = (HERE / "README.md").read_text()

# Version
__version__ = "0.1.0"

setup(
    name="degviz",
    version=__version__,
    author="degviz Development Team",
    description="Volcano, Venn and UpSet plotting helpers for RNA-seq and ATAC-seq results",
    long_description=README,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "Topic :: Scientific/Engineering :: Visualization",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=[
        # Core scientific computing
        "numpy>=1.20.0",
        "pandas>=1.3.0,<3",  # upsetplot 0.9 fills NaN in place, a no-op under pandas 3
        # Visualization
        "matplotlib>=3.7.0",
        "seaborn>=0.11.0",
        "adjustText>=1.1.0",
        "venn>=0.1.3",
        "upsetplot>=0.8.0",
        # Configuration and utilities
        "pyyaml>=6.0",
        "click>=8.0.0",
        "colorlog>=6.6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "black>=22.0.0",
            "isort>=5.10.0",
            "flake8>=5.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "degviz=degviz.cli:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
    keywords=[
        "bioinformatics",
        "RNA-seq",
        "ATAC-seq",
        "volcano-plot",
        "venn-diagram",
        "upset-plot",
        "differential-expression",
        "ChIPseeker",
    ],
)
