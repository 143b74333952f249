"""Report generation: text rendering and CSV/JSON run artifacts"""
import pandas as pd
import json
from pathlib import Path
from typing import List, Dict, Optional, Union, Any
from dataclasses import dataclass

from steam_train_fuel.src.commands import Command, command_to_dict, fuel_cost
from steam_train_fuel.src.train import Train

DEFAULT_STEP = 25
DEFAULT_MAJOR_TICK = 100

STATES_COLUMNS = ['step', 'location', 'fuel', 'stashed_total', 'stash_count']
COMMANDS_COLUMNS = ['step', 'command', 'value', 'fuel_cost']


def render_train(train: Train, step: int = DEFAULT_STEP, major_tick: int = DEFAULT_MAJOR_TICK) -> str:
    """
    Draw the line from the depot to the destination.

    One symbol per `step` units: X is the train, | a major tick already passed,
    = track already passed. The end marker is [X] on arrival and [>] past it.
    Stashes are listed underneath, pointing at their column.
    """
    destination = train.goal.destination
    location = train.location

    symbols = []
    for x in range(0, destination, step):
        if location <= x < location + step:
            symbols.append("X")
        elif x <= location and x % major_tick == 0:
            symbols.append("|")
        elif x <= location:
            symbols.append("=")
        else:
            symbols.append(" ")
    if location == destination:
        symbols.append("[X]")
    elif location > destination:
        symbols.append("[>]")
    else:
        symbols.append("[ ]")

    lines = [" ".join(symbols) + f" @ {location:3}, fuel {train.fuel:3}"]
    for stash_location, amount in sorted(train.stashes.items()):
        indent = max(1, (stash_location // step) * 2)
        lines.append(" " * indent + f"^[{amount} stash @{stash_location}]")
    return "\n".join(lines)


def format_summary(summary) -> str:
    """One-line result, preceded by the failure reason when the run failed"""
    text = f"fuel_used = {summary.fuel_used}, steps = {summary.steps}"
    if summary.error is not None:
        text = f"FAILURE @{summary.final_state.location}:: \"{summary.error}\"\n" + text
    return text


def states_frame(states: List[Train]) -> pd.DataFrame:
    rows = [
        {
            'step': i,
            'location': s.location,
            'fuel': s.fuel,
            'stashed_total': sum(s.stashes.values()),
            'stash_count': len(s.stashes),
        }
        for i, s in enumerate(states)
    ]
    return pd.DataFrame(rows, columns=STATES_COLUMNS)


def commands_frame(commands: List[Command]) -> pd.DataFrame:
    rows = []
    for i, command in enumerate(commands, start=1):
        row = command_to_dict(command)
        rows.append({
            'step': i,
            'command': row['command'],
            'value': row['value'],
            'fuel_cost': fuel_cost(command),
        })
    return pd.DataFrame(rows, columns=COMMANDS_COLUMNS)


@dataclass
class ValidationResult:
    """Result of artifact validation"""
    passed: bool                     # True only if no hard failures
    failures: List[str]
    warnings: List[str]
    summary: Dict[str, Any]          # Parsed summary.json
    artifacts_dir: Path


def validate_summary_artifacts(artifacts_dir: Union[str, Path]) -> ValidationResult:
    """
    Re-check written artifacts against the run invariants:
    fuel_used equals the summed command costs, steps equals the command count,
    no state has negative fuel or location, and a successful run ends on the
    destination.
    """
    artifacts_dir = Path(artifacts_dir)
    failures: List[str] = []
    warnings: List[str] = []

    required_files = {
        'states.csv': artifacts_dir / 'states.csv',
        'commands.csv': artifacts_dir / 'commands.csv',
        'summary.json': artifacts_dir / 'summary.json',
    }
    missing = [name for name, path in required_files.items() if not path.exists()]
    if missing:
        failures.extend(f"Missing required artifact: {name}" for name in missing)
        return ValidationResult(False, failures, warnings, {}, artifacts_dir)

    states_df = pd.read_csv(required_files['states.csv'])
    commands_df = pd.read_csv(required_files['commands.csv'])
    with open(required_files['summary.json'], 'r') as f:
        summary = json.load(f)

    expected_fuel = int(commands_df['fuel_cost'].sum()) if len(commands_df) else 0
    if summary.get('fuel_used') != expected_fuel:
        failures.append(
            f"fuel_used mismatch: summary={summary.get('fuel_used')}, commands.csv={expected_fuel}"
        )

    if summary.get('steps') != len(commands_df):
        failures.append(f"steps mismatch: summary={summary.get('steps')}, commands.csv={len(commands_df)}")

    if len(states_df) == 0:
        failures.append("states.csv is empty")
    else:
        if (states_df['fuel'] < 0).any():
            failures.append("Negative fuel in states.csv")
        if (states_df['location'] < 0).any():
            failures.append("Negative location in states.csv")
        if summary.get('succeeded') and states_df['location'].iloc[-1] != summary.get('destination'):
            failures.append(
                f"Run marked successful but ends at {states_df['location'].iloc[-1]}, "
                f"destination {summary.get('destination')}"
            )

    if not summary.get('succeeded'):
        warnings.append(f"Run failed: {summary.get('error')}")

    return ValidationResult(
        passed=len(failures) == 0,
        failures=failures,
        warnings=warnings,
        summary=summary,
        artifacts_dir=artifacts_dir
    )


class ReportGenerator:
    """Write run artifacts"""

    def __init__(self, output_dir: str = "reports"):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.artifacts_dir = self.output_dir / "artifacts"
        self.artifacts_dir.mkdir(parents=True, exist_ok=True)

    def generate_states_csv(self, states: List[Train]):
        states_frame(states).to_csv(self.artifacts_dir / 'states.csv', index=False)

    def generate_commands_csv(self, commands: List[Command]):
        commands_frame(commands).to_csv(self.artifacts_dir / 'commands.csv', index=False)

    def generate_summary_json(self, summary):
        with open(self.artifacts_dir / 'summary.json', 'w') as f:
            json.dump(summary.to_dict(), f, indent=2)

    def generate_event_log_jsonl(self, events: List[Dict]):
        """Generate log_events.jsonl"""
        with open(self.output_dir / 'log_events.jsonl', 'w') as f:
            for entry in events:
                f.write(json.dumps(entry, default=str) + '\n')

    def save_params_snapshot(self, params: Dict):
        """Save params_used.json"""
        with open(self.output_dir / 'params_used.json', 'w') as f:
            json.dump(params, f, indent=2, default=str)

    def generate_all(self, summary, params: Optional[Dict] = None) -> Path:
        """Write every artifact for a run and return the artifacts directory"""
        self.generate_states_csv(summary.states)
        self.generate_commands_csv(summary.commands)
        self.generate_summary_json(summary)
        self.generate_event_log_jsonl(summary.events)
        if params is not None:
            self.save_params_snapshot(params)
        return self.artifacts_dir
