"""
Command-line interface for the compile driver.
"""

from .main import main

__all__ = ["main"]
