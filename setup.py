#!/usr/bin/env python3
"""Setup script for GP2 to OSP extractor."""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="gp2osp",
    version="1.2.0",
    author="Sierra Telecom",
    author_email="support@sierratelecom.com",
    description="Extracts SiRF IV OSP receiver messages from GP2 debug logs into OSP binary files",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/sierratelecom/gp2osp",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: GIS",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Operating System :: POSIX :: Linux",
    ],
    python_requires=">=3.8",
    install_requires=[
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "gp2osp=gp2osp.cli:main",
        ],
    },
)
