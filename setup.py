#!/usr/bin/env python3
"""
Setup script for YASS
A save file lifecycle manager for games
"""

from setuptools import setup, find_namespace_packages
import os

# Read the README file
def read_readme():
    readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
    if os.path.exists(readme_path):
        with open(readme_path, 'r', encoding='utf-8') as f:
            return f.read()
    return "A save file lifecycle manager for games"

# Read requirements
def read_requirements():
    req_path = os.path.join(os.path.dirname(__file__), 'requirements.txt')
    requirements = []
    if os.path.exists(req_path):
        with open(req_path, 'r', encoding='utf-8') as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith('#'):
                    requirements.append(line)
    return requirements

setup(
    name="yass",
    version="0.1.0",
    description="A save file lifecycle manager for games",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    license="MIT",

    packages=find_namespace_packages(where="src", include=["yass", "yass.*"]),
    package_dir={"": "src"},

    python_requires=">=3.11",
    install_requires=read_requirements(),

    entry_points={
        "console_scripts": [
            "yass=yass.main:main",
        ],
    },

    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.11",
        "Topic :: Games/Entertainment",
    ],

    keywords="game save load autosave serialization",

    extras_require={
        "dev": [
            "pytest==8.4.1",
        ],
    },
)
