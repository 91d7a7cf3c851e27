"""Run the table engine demo: ``python -m table_engine``."""

import sys

from table_engine.adapters.inbound.cli import main

sys.exit(main())
