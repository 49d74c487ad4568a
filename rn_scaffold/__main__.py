"""Allow ``python -m rn_scaffold``."""

import sys

from rn_scaffold.cli import main

sys.exit(main())
