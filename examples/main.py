"""
main.py — Run a St Lucia game
=============================

Plays one game between the built-in EAIT player and your strategy in
my_strategy.py, using the rolls in rolls.txt.

    python main.py

Press Ctrl+C to stop.
"""

import os
import sys

from stlucia import HubConfig, StLuciaHub

HERE = os.path.dirname(os.path.abspath(__file__))

# my_strategy.py ships executable with a python3 shebang
my_player = os.path.join(HERE, "my_strategy.py")

# ── Configuration ──
config = HubConfig(
    roll_file=os.path.join(HERE, "rolls.txt"),
    score_limit=15,
    programs=["stlucia-eait", my_player],

    # Seconds to wait for each player to exit after the game
    reap_timeout=2.0,
    # Print every protocol line instead of the game narration
    trace=False,
)

# ── Play ──
sys.exit(StLuciaHub(config).run())
