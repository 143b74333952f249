"""Command plan loader for scripted runs"""
import json
from pathlib import Path
from typing import List
import pandas as pd

from steam_train_fuel.src.commands import Command, parse_command
from steam_train_fuel.src.errors import PlanValidationError
from .schema import PlanSchema


class PlanLoader:
    """Loads and validates command plans from JSON/CSV files"""

    def __init__(self, plan_path: str):
        self.plan_path = Path(plan_path)
        if not self.plan_path.exists():
            raise FileNotFoundError(f"Plan file does not exist: {plan_path}")

    def load_frame(self) -> pd.DataFrame:
        """Read the plan into a command/value DataFrame"""
        suffix = self.plan_path.suffix.lower()
        if suffix == '.csv':
            return pd.read_csv(self.plan_path)
        if suffix == '.json':
            with open(self.plan_path, 'r') as f:
                raw = json.load(f)
            if isinstance(raw, dict):
                raw = raw.get('commands', [])
            if not isinstance(raw, list):
                raise PlanValidationError([f"{self.plan_path.name}: expected a list of commands"])
            rows = []
            for entry in raw:
                if isinstance(entry, str):
                    parts = entry.split()
                    # extra tokens stay in the value so the schema rejects them
                    rows.append({
                        'command': parts[0] if parts else '',
                        'value': ' '.join(parts[1:]) if len(parts) > 1 else None,
                    })
                elif isinstance(entry, dict):
                    rows.append({'command': entry.get('command'), 'value': entry.get('value')})
                else:
                    raise PlanValidationError([f"{self.plan_path.name}: unsupported command entry {entry!r}"])
            return pd.DataFrame(rows, columns=PlanSchema.REQUIRED_FIELDS)
        raise ValueError(f"Unsupported plan format: {self.plan_path.suffix} (expected .json or .csv)")

    def load(self) -> List[Command]:
        """Load the plan as a list of commands, raising PlanValidationError on schema errors"""
        df = self.load_frame()
        errors = PlanSchema.validate_plan_frame(df, source=self.plan_path.name)
        if errors:
            raise PlanValidationError(errors)
        commands = []
        for row, record in enumerate(df.to_dict('records')):
            value, _ = PlanSchema.parse_value(record['value'])
            try:
                commands.append(parse_command({'command': record['command'], 'value': value}))
            except (TypeError, ValueError) as e:
                errors.append(f"{self.plan_path.name}: row {row}: {e}")
        if errors:
            raise PlanValidationError(errors)
        return commands
