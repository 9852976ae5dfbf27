from setuptools import setup, find_packages

# Import version from the package
from simpleprint.version import __version__

setup(
    name="simpleprint",
    version=__version__,
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "fastapi>=0.100.0,<0.137",
        "uvicorn>=0.23.0",
        "typer>=0.9.0",
        "pydantic>=2.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "httpx>=0.24.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "simpleprint=simpleprint.main:app",
        ],
    },
    python_requires=">=3.10",
)
