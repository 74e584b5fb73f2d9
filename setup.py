"""
Setup script for installing the cargo-dub CLI.
"""
from setuptools import setup, find_packages

setup(
    name='cargo-dub',
    version='0.3.0',
    description='Run DUB, the D package manager, through familiar subcommands',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'colorama>=0.4.6',
        'tabulate>=0.9.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'cargo-dub=cargo_dub.cli:main',
        ],
    },
    python_requires='>=3.7',
)
