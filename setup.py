"""Setup configuration for dexsearch.

This file provides backward compatibility with tools that expect setup.py.
Modern Python projects should use pyproject.toml (PEP 517/518).

See pyproject.toml for the actual project configuration.
"""

from setuptools import setup

setup()
