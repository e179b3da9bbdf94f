"""
nuxsec Setup Script
===================
Neutrino Cross-Section Comparison Toolkit
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="nuxsec",
    version="1.0.0",
    author="nuxsec Team",
    author_email="nuxsec@example.com",
    description="Plot pre-calculated neutrino cross sections and compare them against a reference set",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Physics",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.24.0",
        "pandas>=2.0.0",
        "scipy>=1.10.0",
        "pyarrow>=12.0.0",
        "matplotlib>=3.7.0",
        "tqdm>=4.65.0",
        "uproot>=5.3.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "nuxsec-xsec-comp=nuxsec.apps.xsec_comp:main",
            "nuxsec-xsec-overlay=nuxsec.apps.xsec_overlay:main",
        ],
    },
    keywords="neutrino physics cross-sections event-generator validation",
)
