"""Allow ``python -m gmail_metadata_archiver``."""

import sys

from gmail_metadata_archiver.cli import main

sys.exit(main())
