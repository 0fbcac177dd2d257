"""
Setup script for the stlucia package.

Installs the hub command and one command per built-in player strategy.
"""

from setuptools import setup, find_packages

setup(
    name="stlucia",
    version="1.0.0",
    description="St Lucia dice game hub, player protocol and built-in players",
    author="Course Staff",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
        "dev": [
            "pytest>=7.0",
            "build",
            "wheel",
        ],
    },
    entry_points={
        "console_scripts": [
            "stlucia=stlucia.cli:main",
            "stlucia-eait=stlucia.player:main_eait",
            "stlucia-habs=stlucia.player:main_habs",
            "stlucia-hass=stlucia.player:main_hass",
            "stlucia-mabs=stlucia.player:main_mabs",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Education",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
