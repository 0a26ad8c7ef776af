"""calckit - Terminal arithmetic calculator."""
from setuptools import setup, find_packages

setup(
    name="calckit",
    version="1.0.0",
    description="Left-to-right arithmetic calculator with scientific mode and persistent history",
    author="Morten Elmstroem Hansen",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={
        "calckit": ["templates/*"],
    },
    install_requires=[
        "click>=8.1.0",
        "jinja2>=3.1.0",
        "rich>=13.0.0",
        "questionary>=2.0.0",
        "pyyaml>=6.0",
        "toml>=0.10.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "calckit=calckit.cli:main",
        ],
    },
    python_requires=">=3.10",
)
