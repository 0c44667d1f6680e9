#!/usr/bin/env python3
"""
Setup script for artpick
"""

from setuptools import setup
import glob
import os

# Read requirements from requirements.txt
def read_requirements():
    with open('requirements.txt', 'r') as f:
        return [line.strip() for line in f if line.strip() and not line.startswith('#')]

# Read long description from README
def read_long_description():
    if os.path.exists('README.md'):
        with open('README.md', 'r', encoding='utf-8') as f:
            return f.read()
    return "A CLI browser for paginated artwork collections with \"select first N\" selection"

# Modules live flat under src/
def find_modules():
    return sorted(os.path.splitext(os.path.basename(path))[0] for path in glob.glob('src/*.py'))

setup(
    name="artpick",
    version="1.0.0",
    description="A CLI browser for paginated artwork collections with \"select first N\" selection",
    long_description=read_long_description(),
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    py_modules=find_modules(),
    install_requires=read_requirements(),
    extras_require={
        "test": ["pytest>=7.4.0"],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "artpick=cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Internet :: WWW/HTTP",
        "Topic :: Utilities",
    ],
    keywords="pagination selection cli artworks api",
    include_package_data=True,
)
