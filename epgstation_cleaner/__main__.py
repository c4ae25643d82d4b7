"""Allow running the cleaner with ``python -m epgstation_cleaner``."""

import sys

from epgstation_cleaner.main import main

if __name__ == "__main__":
    sys.exit(main())
