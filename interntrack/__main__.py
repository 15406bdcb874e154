"""
Package entry point.

Allows running the application via:

    python -m interntrack

This simply forwards execution to interntrack.cli.main().
"""

from interntrack.cli import main

if __name__ == "__main__":
    main()
