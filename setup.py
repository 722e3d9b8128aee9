# setup.py

from setuptools import setup, find_packages

setup(
    name="exact_tsp",
    version="0.1.0",
    author="Kushagra Bharti",
    description="Exact Held-Karp dynamic programming solver for the symmetric TSP",
    packages=find_packages(exclude=["tests*", "benchmarks*", "examples*", "scripts*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": [
            "pytest",
            "hypothesis",
        ],
    },
)
