"""Allow ``python -m tscatalog``."""

import sys

from tscatalog.cli import main

sys.exit(main())
