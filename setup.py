# setup.py
from setuptools import setup, find_packages

setup(
    name="atto",
    version="0.1.0",
    description="Parser and minimal evaluator for the atto atom/list/map notation",
    packages=find_packages(include=["atto", "atto.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
