"""Allow ``python -m vmremote``."""

import sys

from vmremote.cli import main

if __name__ == "__main__":
    sys.exit(main())
