# flake8: noqa
from setuptools import setup, find_packages
from pathlib import Path

long_description = (Path(__file__).parent / "README.md").read_text()

exec(open("rvsim/version.py").read())

setup(
    name="rvsim-kit",
    version=__version__,
    description="Data manipulation for simulation studies of rare variant association tests",
    packages=find_packages(include=["rvsim", "rvsim.*"]),
    python_requires=">=3.7",
    install_requires=[
        "numpy",
        "pandas",
        "structlog",
        "pyreadr",
    ],
    extras_require={"test": ["pytest", "scipy"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "Intended Audience :: Science/Research",
    ],
    long_description=long_description,
    long_description_content_type="text/markdown",
)
