# Area: Hub
# PRD: docs/protocol.md
"""Allow running the hub with: python -m stlucia rollfile winscore prog1 prog2 ..."""

import sys

from .cli import main

sys.exit(main())
