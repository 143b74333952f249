"""Goal specification: tank capacity and destination marker"""
from dataclasses import dataclass

from steam_train_fuel.src.errors import TrivialGoalError


@dataclass(frozen=True)
class GoalSpec:
    """
    Immutable goal for a run.

    The destination must be out of reach of a single tank, otherwise the goal
    is met by one Travel(destination).
    """
    capacity: int
    destination: int

    def __post_init__(self):
        if self.capacity < 0 or self.destination < 0:
            raise ValueError(
                f"capacity ({self.capacity}) and destination ({self.destination}) must be non-negative"
            )
        if self.destination <= self.capacity:
            raise TrivialGoalError(
                f"illegal trivial goal: destination ({self.destination}) is within capacity ({self.capacity})"
            )

    @classmethod
    def from_params(cls, params) -> 'GoalSpec':
        """Build from the 'goal' section of a ParamsLoader"""
        return cls(
            capacity=int(params.get('goal', 'capacity')),
            destination=int(params.get('goal', 'destination')),
        )
