"""Package entry point for ``python -m tmx2c``.

WHY: Users run the converter as ``python -m tmx2c level1.tmx level2.tmx``
without installing the console script.

HOW: Delegates to the CLI's main() and exits with its return code.
"""

import sys

from tmx2c.cli import main

if __name__ == "__main__":
    sys.exit(main())
