"""
Prebuilder - Main entry point

Allows running the command line with `python -m prebuilder`.
"""

from .cli import cli

if __name__ == "__main__":
    cli()
