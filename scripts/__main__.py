"""Allow `python -m scripts` by running the report export."""

import sys

from scripts.export_report import main

sys.exit(main())
