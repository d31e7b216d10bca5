# setup.py
"""Setup script for the Media Browser."""

import os

from setuptools import setup, find_packages

setup(
    name="media-browser",
    version="1.0.0",
    description="Media library catalog with cached movie and archive thumbnails",
    long_description=open("README.md").read() if os.path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="Media Browser Team",
    packages=find_packages(exclude=["media_browser.tests", "media_browser.tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "Pillow>=9.1.0",
        "PyYAML>=5.4",
        "tqdm>=4.50.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "media-browser=media_browser.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Video",
        "Topic :: Multimedia :: Graphics",
    ],
)

# requirements.txt
# Core dependencies
# Pillow>=9.1.0
# PyYAML>=5.4
# tqdm>=4.50.0
#
# Test dependencies (pip install -e .[test])
# pytest>=7.0.0
# pytest-asyncio>=0.21.0
