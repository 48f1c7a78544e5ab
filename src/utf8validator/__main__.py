"""Allow ``python -m utf8validator``."""

import sys

from utf8validator.cli import main

sys.exit(main())
