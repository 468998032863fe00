"""Allow ``python -m reslock``."""

import sys

from reslock.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
