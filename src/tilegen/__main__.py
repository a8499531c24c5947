"""Entry point for ``python -m tilegen``."""

import sys

from .cli import main

sys.exit(main())
