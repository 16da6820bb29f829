"""
GP2 to OSP - Package entry point.

Allows running the extractor with: python -m gp2osp
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
