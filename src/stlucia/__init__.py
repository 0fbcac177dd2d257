"""
stlucia — St Lucia dice game hub and players
============================================

A hub process referees a King-of-the-Hill style dice game between 2 and
26 player programs, talking to each over a pair of pipes with a
line-based text protocol. Dice come from a roll file, so every game is
reproducible.

Run a game:
    stlucia rolls.txt 15 stlucia-eait stlucia-mabs

From Python:
    from stlucia import HubConfig, StLuciaHub
    config = HubConfig(roll_file="rolls.txt", score_limit=15,
                       programs=["stlucia-eait", "stlucia-mabs"])
    StLuciaHub(config).run()

Custom player:
    from stlucia import PlayerStrategy, run_player
    class MyStrategy(PlayerStrategy): ...  # Implement 2 methods
    sys.exit(run_player(MyStrategy()))
"""

from ._config import HubConfig
from ._shared.dice import DiceSet, FACES
from .hub import StLuciaHub
from .player import PlayerClient, run_player
from .strategy import PlayerStrategy, PlayerView
from .strategies import (
    EAITStrategy,
    HABSStrategy,
    HASSStrategy,
    MABSStrategy,
    STRATEGIES,
    get_strategy,
)
from .errors import (
    ExitCode,
    PlayerExitCode,
    StLuciaError,
    InvalidArgumentsError,
    InvalidScoreError,
    RollFileOpenError,
    InvalidRollFileError,
    PipingFailureError,
    PlayerQuitError,
    InvalidMessageError,
    InvalidRequestError,
    HubInterruptedError,
    PlayerClientError,
    StrategyDecisionError,
)

__version__ = "1.0.0"

__all__ = [
    "HubConfig",
    "DiceSet",
    "FACES",
    "StLuciaHub",
    "PlayerClient",
    "run_player",
    "PlayerStrategy",
    "PlayerView",
    "EAITStrategy",
    "HABSStrategy",
    "HASSStrategy",
    "MABSStrategy",
    "STRATEGIES",
    "get_strategy",
    "ExitCode",
    "PlayerExitCode",
    "StLuciaError",
    "InvalidArgumentsError",
    "InvalidScoreError",
    "RollFileOpenError",
    "InvalidRollFileError",
    "PipingFailureError",
    "PlayerQuitError",
    "InvalidMessageError",
    "InvalidRequestError",
    "HubInterruptedError",
    "PlayerClientError",
    "StrategyDecisionError",
]
