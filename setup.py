from setuptools import setup, find_packages

setup(
    name="c4term",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "requests",  # Remote solver player
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": [
            "c4term=c4term.interfaces.cli:main",
        ],
    },
)
