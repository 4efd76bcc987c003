"""
Entry point for running InterpKit CLI as a module.

Usage: python -m interpkit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
