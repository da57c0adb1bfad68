"""
Gatehouse - Module Entry Point

Allows running the CLI as "python -m gatehouse roles:seed".
"""

import sys

from gatehouse.cli import main

if __name__ == '__main__':
    sys.exit(main())
