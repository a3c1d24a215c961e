#!/usr/bin/env python3
"""
Setup configuration for GS1 DataMatrix Label Printer
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setup(
    name="gs1-label-printer",
    version="1.0.0",
    author="GS1 Label Team",
    author_email="",
    description="Parse scanned GS1 element strings and print 58x40 mm DataMatrix labels",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "examples", "modules"]),
    python_requires=">=3.9",
    install_requires=[
        "streamlit>=1.30",
        "reportlab>=4.0",
        "treepoem>=3.23",
        "Pillow>=10.0",
        "structlog>=23.1",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "pandas>=2.0",
        "openpyxl>=3.1",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "gs1-label=gs1_label.__main__:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Manufacturing",
        "Intended Audience :: Developers",
        "Topic :: Printing",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    keywords="gs1 datamatrix label gtin serial crypto-tail marking",
)
