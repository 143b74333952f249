"""Built-in demonstration scenarios"""
from typing import Dict, List, Tuple

from steam_train_fuel.src.commands import Command, StowFuel, Travel
from steam_train_fuel.src.goal import GoalSpec

# One cache at 200: two outbound legs of 200 from the depot, 100 left behind
CACHE_AT_200_PLAN: List[Command] = [
    Travel(200),
    StowFuel(100),
    Travel(-200),
    Travel(200),
    Travel(400),
]

SCENARIOS: Dict[str, Tuple[GoalSpec, List[Command]]] = {
    '600': (GoalSpec(capacity=500, destination=600), CACHE_AT_200_PLAN),
    # Same plan falls 200 short of 800
    '800': (GoalSpec(capacity=500, destination=800), CACHE_AT_200_PLAN),
}


def get_scenario(name: str) -> Tuple[GoalSpec, List[Command]]:
    """Goal and a fresh copy of the plan for a named scenario"""
    if name not in SCENARIOS:
        raise KeyError(f"Unknown scenario '{name}' (available: {sorted(SCENARIOS)})")
    goal, plan = SCENARIOS[name]
    return goal, list(plan)
