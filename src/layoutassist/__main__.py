"""
Entry point for running layoutassist as a module.

Usage:
    python -m layoutassist complete layout.xml --offset 120
"""

from layoutassist.cli.commands import main

if __name__ == '__main__':
    main()
