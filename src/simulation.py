"""Run a strategy against a goal and summarize the outcome"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from steam_train_fuel.src.commands import Command, command_to_dict, fuel_cost, parse_command
from steam_train_fuel.src.errors import TrainError
from steam_train_fuel.src.goal import GoalSpec
from steam_train_fuel.src.logging import log_sim_event
from steam_train_fuel.src.strategy import ScriptedStrategy, Strategy
from steam_train_fuel.src.train import Train

DEFAULT_MAX_STEPS = 20

STRATEGY_EXHAUSTED = "strategy returned None"
MAX_STEPS_REACHED = "simulation max iteration counter reached"


@dataclass
class SimulationSummary:
    """Result of a simulate() run"""
    goal: GoalSpec
    final_state: Train
    error: Optional[str]
    commands: List[Command]
    states: List[Train]
    events: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def steps(self) -> int:
        return len(self.commands)

    @property
    def fuel_used(self) -> int:
        """Distance travelled by every command issued, the rejected one included"""
        return sum(fuel_cost(c) for c in self.commands)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'capacity': self.goal.capacity,
            'destination': self.goal.destination,
            'succeeded': self.succeeded,
            'error': self.error,
            'final_location': self.final_state.location,
            'final_fuel': self.final_state.fuel,
            'fuel_used': self.fuel_used,
            'steps': self.steps,
            'commands': [command_to_dict(c) for c in self.commands],
        }


def replay_states(goal: GoalSpec, commands: Iterable[Command]) -> List[Train]:
    """
    Rebuild the sequence of states a command list produces, starting from a
    fresh train. Stops before the first command the train rejects.
    """
    state = Train.from_goal(goal)
    states = [state]
    for command in commands:
        try:
            state = state.update(command)
        except TrainError:
            break
        states.append(state)
    return states


def simulate(
    goal: GoalSpec,
    strategy: Union[Strategy, Iterable],
    max_steps: int = DEFAULT_MAX_STEPS,
    event_log: Optional[List[Dict]] = None,
    echo_events: bool = False
) -> SimulationSummary:
    """
    Simulate a train following a strategy's commands.

    Each step records the current state, stops with success once the goal is
    met, and otherwise applies the strategy's next command. A plain iterable of
    commands is treated as a scripted plan.

    Args:
        goal: Goal to reach
        strategy: Strategy instance or iterable of commands
        max_steps: Upper bound on loop iterations
        event_log: Optional list receiving structured events
        echo_events: Print events as they are logged

    Returns:
        SimulationSummary (failures are recorded in summary.error, not raised)
    """
    if not isinstance(strategy, Strategy):
        strategy = ScriptedStrategy(strategy)
    events = event_log if event_log is not None else []

    state = Train.from_goal(goal)
    commands: List[Command] = []
    states: List[Train] = []

    def finish(error: Optional[str]) -> SimulationSummary:
        if not states or states[-1] is not state:
            states.append(state)
        if error is None:
            log_sim_event('goal_reached', {
                'steps': len(commands), 'location': state.location, 'fuel': state.fuel
            }, logger=events, echo=echo_events)
        else:
            log_sim_event('run_failed', {
                'steps': len(commands), 'location': state.location, 'reason': error
            }, logger=events, echo=echo_events)
        return SimulationSummary(
            goal=goal,
            final_state=state,
            error=error,
            commands=commands,
            states=states,
            events=events,
        )

    for _ in range(max_steps):
        states.append(state)
        if state.meets_goal(goal):
            return finish(None)

        command = strategy.decide(state, goal)
        if command is None:
            return finish(STRATEGY_EXHAUSTED)
        command = parse_command(command)

        commands.append(command)
        try:
            new_state = state.update(command)
        except TrainError as e:
            log_sim_event('command_rejected', {
                'step': len(commands), 'command': str(command), 'location': state.location,
                'fuel': state.fuel, 'reason': str(e)
            }, logger=events, echo=echo_events)
            return finish(str(e))

        state = new_state
        log_sim_event('command_applied', {
            'step': len(commands), 'command': str(command),
            'location': state.location, 'fuel': state.fuel
        }, logger=events, echo=echo_events)

    return finish(MAX_STEPS_REACHED)
