"""GitHub Migration Tool

Copies the labels and issues of one GitHub repository into another, then
duplicates an organization project and attaches the copied issues to it.
"""

__version__ = '0.1.0'

from .cli.main import main

__all__ = ['main', '__version__']
