"""Setup script for the release_tools package."""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README file for long description
readme_path = Path(__file__).parent / "README.md"
try:
    with open(readme_path, encoding="utf-8") as f:
        long_description = f.read()
except FileNotFoundError:
    long_description = "Build and release helpers: 64-second timestamp version encoding and file stamping"

setup(
    name="release_tools",
    version="1.0.0",
    description="Encode build timestamps into version numbers and stamp them into files",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Max Qian",
    author_email="astro_air@126.com",
    url="https://github.com/max-qian/lithium-next",
    package_dir={"": "python/tools"},
    packages=find_packages(where="python/tools"),
    python_requires=">=3.11",
    install_requires=[
        "loguru>=0.6.0",
        "typer>=0.9.0",
        "rich>=12.0.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "mypy>=1.0.0",
            "black>=22.0.0",
            "isort>=5.10.0",
            "flake8>=5.0.0",
        ],
        "test": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Build Tools",
        "Topic :: Utilities",
        "Typing :: Typed",
    ],
    keywords="version build release ci timestamp",
    entry_points={
        "console_scripts": [
            "release-tools=release_tools.cli:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
