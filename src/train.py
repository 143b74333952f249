"""Train state: location, tank fuel and fuel stashes along the line"""
from dataclasses import dataclass, field, replace
from typing import Dict, Optional

from steam_train_fuel.src.commands import Command, StowFuel, Travel
from steam_train_fuel.src.errors import (
    InsufficientFuelError,
    MovedBeyondDepotError,
    StowAtDepotError,
)
from steam_train_fuel.src.goal import GoalSpec

DEPOT = 0


@dataclass(frozen=True)
class Train:
    """
    Immutable train state.

    Every operation returns a new Train and leaves the receiver untouched,
    so a rejected command never corrupts the state it was issued against.
    """
    goal: GoalSpec
    location: int = DEPOT
    fuel: int = 0
    _stashes: Dict[int, int] = field(default_factory=dict, repr=False)

    @classmethod
    def create(cls, capacity: int, destination: int) -> 'Train':
        """New train at the depot with a full tank"""
        return cls.from_goal(GoalSpec(capacity, destination))

    @classmethod
    def from_goal(cls, goal: GoalSpec) -> 'Train':
        return cls(goal=goal, location=DEPOT, fuel=goal.capacity, _stashes={})

    @property
    def stashes(self) -> Dict[int, int]:
        return dict(self._stashes)

    def stowed_at(self, location: int) -> Optional[int]:
        return self._stashes.get(location)

    def meets_goal(self, goal: Optional[GoalSpec] = None) -> bool:
        goal = goal if goal is not None else self.goal
        return self.location == goal.destination

    def travel(self, distance: int) -> 'Train':
        """
        Travel the given distance (+forward, -backward).

        Arriving on a stash picks all of it up. Arriving at the depot with no
        stash there refills the tank to capacity.
        """
        location = self.location + distance
        if location < DEPOT:
            raise MovedBeyondDepotError()

        fuel = self.fuel - abs(distance)
        if fuel < 0:
            raise InsufficientFuelError()

        stashes = dict(self._stashes)
        stashed = stashes.pop(location, None)
        if stashed is not None:
            fuel += stashed
        elif location == DEPOT:
            fuel = self.goal.capacity

        return replace(self, location=location, fuel=fuel, _stashes=stashes)

    def stow_fuel(self, amount: int) -> 'Train':
        """Move fuel from the tank into the stash at the current location"""
        if self.location == DEPOT:
            raise StowAtDepotError()
        if amount < 0:
            raise ValueError(f"Cannot stow a negative amount of fuel: {amount}")
        if amount > self.fuel:
            raise InsufficientFuelError("stowed more fuel than was in the tank")

        stashes = dict(self._stashes)
        stashes[self.location] = stashes.get(self.location, 0) + amount
        return replace(self, fuel=self.fuel - amount, _stashes=stashes)

    def update(self, command: Command) -> 'Train':
        if isinstance(command, Travel):
            return self.travel(command.distance)
        if isinstance(command, StowFuel):
            return self.stow_fuel(command.amount)
        raise TypeError(f"Unknown command: {command!r}")
