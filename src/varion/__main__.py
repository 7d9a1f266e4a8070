"""Allow running varion as ``python -m varion``."""

import sys

from varion.cli import main

sys.exit(main())
