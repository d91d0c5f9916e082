"""
addgitignore CLI entry point.

Usage:
    python -m addgitignore list
    python -m addgitignore add Python
"""

from addgitignore.cli import main

if __name__ == "__main__":
    main()
