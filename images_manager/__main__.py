"""Main entry point for Images Manager.

This allows the package to be run as:
    python -m images_manager
"""

from .cli.main import cli

if __name__ == "__main__":
    cli()
