"""
Setup script for ghist.
"""

from setuptools import setup, find_packages

setup(
    name="ghist",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    package_data={"ghist": ["py.typed"]},
    python_requires=">=3.10",
    extras_require={"test": ["pytest"]},
)
