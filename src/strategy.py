"""Strategies deciding which command the train runs next"""
from abc import ABC, abstractmethod
from typing import Iterable, Optional

import numpy as np

from steam_train_fuel.src.commands import Command, StowFuel, Travel, parse_command
from steam_train_fuel.src.goal import GoalSpec
from steam_train_fuel.src.train import Train

STRATEGY_MODES = ('scripted', 'flat', 'random')


class Strategy(ABC):
    """Agent commanding the train towards a goal"""

    @abstractmethod
    def decide(self, state: Train, goal: GoalSpec) -> Optional[Command]:
        """Next command, or None when the strategy has nothing left to do"""


class ScriptedStrategy(Strategy):
    """Replays a fixed plan, ignoring the state"""

    def __init__(self, commands: Iterable):
        # Pulled one at a time so unbounded plans stop on the step limit
        self._commands = iter(commands)

    def decide(self, state: Train, goal: GoalSpec) -> Optional[Command]:
        command = next(self._commands, None)
        return None if command is None else parse_command(command)


class FlatStrategy(Strategy):
    """Never issues a command (baseline)"""

    def decide(self, state: Train, goal: GoalSpec) -> Optional[Command]:
        return None


class RandomStrategy(Strategy):
    """
    Seeded random baseline.

    Mostly travels forward or backward by up to max_distance; occasionally
    stows part of the tank. Only proposes moves the train can afford, so runs
    end on the step limit rather than on the first bad command.
    """

    def __init__(self, seed: int = 42, max_distance: int = 250, stow_probability: float = 0.2):
        self.rng = np.random.default_rng(seed)
        self.max_distance = max_distance
        self.stow_probability = stow_probability

    def decide(self, state: Train, goal: GoalSpec) -> Optional[Command]:
        if state.location > 0 and state.fuel > 0 and self.rng.random() < self.stow_probability:
            return StowFuel(int(self.rng.integers(1, state.fuel + 1)))

        reach = min(self.max_distance, state.fuel)
        if reach <= 0:
            # Empty tank away from the depot: nothing affordable left
            return None
        distance = int(self.rng.integers(1, reach + 1))
        if state.location - distance >= 0 and self.rng.random() < 0.5:
            distance = -distance
        return Travel(distance)


def build_strategy(params, commands: Optional[Iterable] = None, mode: Optional[str] = None) -> Strategy:
    """Build a strategy from general.strategy_mode (or an explicit mode)"""
    mode = mode or params.get('general', 'strategy_mode', default='scripted')

    if mode == 'scripted':
        if commands is None:
            raise ValueError("Scripted strategy requires a command plan")
        return ScriptedStrategy(commands)
    if mode == 'flat':
        return FlatStrategy()
    if mode == 'random':
        return RandomStrategy(
            seed=params.get('general', 'random_seed', default=42),
            max_distance=params.get('general', 'random_max_distance', default=250),
        )
    raise ValueError(f"Unknown strategy_mode: {mode} (expected one of {STRATEGY_MODES})")
