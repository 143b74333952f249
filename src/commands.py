"""Elementary train commands and their text/dict forms"""
from dataclasses import dataclass
from typing import Any, Dict, Union


@dataclass(frozen=True)
class Travel:
    """Travel the given distance, +forward or -backward"""
    distance: int

    def __post_init__(self):
        if isinstance(self.distance, bool) or not isinstance(self.distance, int):
            raise TypeError(f"Travel distance must be an integer, got {self.distance!r}")

    def __str__(self):
        return f"travel {self.distance}"


@dataclass(frozen=True)
class StowFuel:
    """Stow the given amount of fuel at the current location"""
    amount: int

    def __post_init__(self):
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise TypeError(f"StowFuel amount must be an integer, got {self.amount!r}")
        if self.amount < 0:
            raise ValueError(f"StowFuel amount must be non-negative, got {self.amount}")

    def __str__(self):
        return f"stow {self.amount}"


Command = Union[Travel, StowFuel]

COMMAND_NAMES = {
    'travel': Travel,
    'stow': StowFuel,
}


def fuel_cost(command: Command) -> int:
    """Fuel burned by a command: |distance| for Travel, nothing for StowFuel"""
    if isinstance(command, Travel):
        return abs(command.distance)
    return 0


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Command value must be an integer, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"Command value must be an integer, got {value!r}")
        return int(value)
    return int(value)


def parse_command(raw: Union[str, Dict[str, Any], Command]) -> Command:
    """
    Parse a command from its text form ('travel 200', 'stow 100') or dict form
    ({'command': 'travel', 'value': 200}). Command instances pass through.
    """
    if isinstance(raw, (Travel, StowFuel)):
        return raw

    if isinstance(raw, dict):
        name = raw.get('command')
        value = raw.get('value')
    elif isinstance(raw, str):
        parts = raw.split()
        if len(parts) != 2:
            raise ValueError(f"Cannot parse command '{raw}': expected '<command> <value>'")
        name, value = parts
    else:
        raise TypeError(f"Unsupported command representation: {raw!r}")

    name = str(name).strip().lower() if name is not None else ''
    if name not in COMMAND_NAMES:
        raise ValueError(f"Unknown command '{name}' (expected one of {sorted(COMMAND_NAMES)})")
    if value is None:
        raise ValueError(f"Command '{name}' is missing a value")

    return COMMAND_NAMES[name](_to_int(value))


def command_to_dict(command: Command) -> Dict[str, Any]:
    if isinstance(command, Travel):
        return {'command': 'travel', 'value': command.distance}
    return {'command': 'stow', 'value': command.amount}
