"""CLI entry point for dictmatch.yaml module.

Usage:
    python -m dictmatch.yaml [options] rules.yaml

Example:
    python -m dictmatch.yaml rules.yaml -q a=1,b=2
    python -m dictmatch.yaml --strategy linear -q a=1 -q b=2 rules.yaml
"""

from .runner import main
import sys

if __name__ == '__main__':
    sys.exit(main())
