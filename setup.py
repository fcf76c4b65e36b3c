"""
Setup script for eodhist package.

This allows eodhist to be installed as a Python package for use by other projects.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the long description from README
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text()

setup(
    name="eodhist",
    version="0.1.0",
    description="Client for the eodhistoricaldata.com end-of-day and realtime stock data API",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="eodhist Contributors",
    license="MIT",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    include_package_data=True,
    install_requires=[
        "httpx>=0.24.0",
        "requests>=2.28.0",
        "pandas>=1.5.0",
        "pyyaml>=6.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.0.0",
        ],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Financial and Insurance Industry",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Framework :: AsyncIO",
        "Topic :: Office/Business :: Financial",
    ],
    keywords="finance, eodhistoricaldata, eod, stock quotes, dividends, splits, api client",
)
