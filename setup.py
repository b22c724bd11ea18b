"""
setup.py

Packaging metadata and CLI entry point for enrichment-lookup.

Version: 1.0.0 - Resolves enrichment declarations of schema descriptor sets
into the flat enrichment map read by the code generator.
"""
from setuptools import setup, find_packages

setup(
    name="enrichment-lookup",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "click",
        "pydantic>=2.0",
        "pyyaml",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
            "hypothesis",
        ],
    },
    entry_points={
        "console_scripts": [
            "enrichment-lookup=cli:cli",
        ],
    },
    python_requires=">=3.8",
)
