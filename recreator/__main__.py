"""Allow ``python -m recreator``."""

import sys

from recreator.cli import main

sys.exit(main())
