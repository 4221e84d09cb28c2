"""
CLI module - command line entry points and interactive shell.
"""

from layoutassist.cli.commands import main

__all__ = ["main"]
