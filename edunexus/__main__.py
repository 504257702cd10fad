"""
Package entry point.

Allows running the application via:

    python -m edunexus

This simply forwards execution to edunexus.cli.main().
"""

from edunexus.cli import main

if __name__ == "__main__":
    main()
