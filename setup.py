"""
modgen - Express/Prisma resource module scaffolder
Install: pip install -e .
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="modgen",
    version="1.0.0",
    author="modgen contributors",
    author_email="",
    description="Generate controller, route, service and validation files for Express/Prisma resources",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["modgen", "modgen.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Code Generators",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.0.0",
        "PyYAML>=6.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "black>=23.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "modgen=modgen.cli:cli_main",
        ],
    },
    keywords="express, prisma, zod, scaffold, generator, crud, cli",
)
