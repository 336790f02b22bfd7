"""TreeSift Command Line Interface.

Usage:
    treesift analyze src/components/Button.tsx
    treesift analyze src/components --format text
    python -m treesift.cli --help
"""

from .main import main

__all__ = ["main"]
