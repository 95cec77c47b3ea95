"""Allow ``python -m hmstl``."""

import sys

from hmstl.cli import main

sys.exit(main())
