"""Allow running as ``python -m jackut``."""

import sys

from jackut.main import main

sys.exit(main())
