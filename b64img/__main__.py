"""Allow running as `python -m b64img`."""

import sys

from b64img.cli import main

sys.exit(main())
