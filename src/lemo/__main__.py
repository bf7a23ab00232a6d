"""Allow ``python -m lemo``."""

import sys

from lemo.cli import main

sys.exit(main())
