"""Error types raised by the train model and plan loading"""


class TrainError(Exception):
    """A command the train cannot carry out from its current state"""


class MovedBeyondDepotError(TrainError):
    def __init__(self, message: str = "moved beyond depot"):
        super().__init__(message)


class InsufficientFuelError(TrainError):
    def __init__(self, message: str = "used more fuel than was in the tank"):
        super().__init__(message)


class StowAtDepotError(TrainError):
    def __init__(self, message: str = "cannot stow fuel at the depot"):
        super().__init__(message)


class TrivialGoalError(ValueError):
    """Destination is reachable on a single tank"""


class PlanValidationError(ValueError):
    """Plan file failed schema validation"""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))
