#!/usr/bin/env python3
"""
my_strategy.py — YOUR PLAYER STRATEGY
=====================================

This is the ONLY file you need to edit.

Implement the 2 methods below. Each receives a PlayerView with:
- view.latest_dice: the dice you are deciding on (a DiceSet)
- view.my_health, view.health: your health and everybody's
- view.in_st_lucia, view.holder_health: who holds St Lucia
- view.players_remaining, view.number_of_rerolls

The package handles everything else: the handshake, reading and
checking hub messages, tracking health and the St Lucia holder, the
reroll limit and healing.

Run it as a player:
    stlucia rolls.txt 15 ./my_strategy.py stlucia-mabs
"""

import sys

from stlucia import DiceSet, PlayerStrategy, run_player


class MyStrategy(PlayerStrategy):

    name = "mine"

    def choose_reroll(self, view):
        """
        Called with every new roll while rerolls remain.
        Return the dice to throw again; an empty DiceSet keeps them all.
        """
        # ─── YOUR LOGIC HERE ───
        # Example: chase 3s, keep everything else
        rerolls = DiceSet()
        for face in ("1", "2"):
            rerolls.add(face, view.latest_dice.count(face))
        if view.in_st_lucia:
            rerolls.add("A", view.latest_dice.attacks)
        return rerolls

    def choose_retreat(self, view):
        """
        Called when you hold St Lucia and were just attacked.
        Return True to leave, False to stay.
        """
        # ─── YOUR LOGIC HERE ───
        return view.my_health <= 4


if __name__ == "__main__":
    sys.exit(run_player(MyStrategy()))
