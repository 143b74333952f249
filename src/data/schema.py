"""Schema validation for command plan files"""
import re
from typing import Any, List, Optional, Tuple
import numpy as np
import pandas as pd

from steam_train_fuel.src.commands import COMMAND_NAMES

INTEGER_TEXT = re.compile(r'^[+-]?\d+$')


class PlanSchema:
    """Validates a command plan table"""

    REQUIRED_FIELDS = ['command', 'value']

    @staticmethod
    def parse_value(value: Any) -> Tuple[Optional[int], Optional[str]]:
        """Integer value of a plan cell, or the reason it is not one"""
        if isinstance(value, (bool, np.bool_)):
            return None, "is not an integer"
        if isinstance(value, (int, np.integer)):
            return int(value), None
        if isinstance(value, (float, np.floating)):
            if np.isnan(value):
                return None, "is not numeric"
            if not float(value).is_integer():
                return None, "is not an integer"
            return int(value), None
        if isinstance(value, str):
            text = value.strip()
            if INTEGER_TEXT.match(text):
                return int(text), None
            if pd.isna(pd.to_numeric(text, errors='coerce')):
                return None, "is not numeric"
            # e.g. '2.5' or '1e2'
            return None, "is not an integer"
        return None, "is not numeric"

    @staticmethod
    def validate_plan_frame(df: pd.DataFrame, source: str = "plan") -> List[str]:
        """Validate a plan DataFrame. Returns list of errors (empty if valid)."""
        errors = []
        for field in PlanSchema.REQUIRED_FIELDS:
            if field not in df.columns:
                errors.append(f"{source}: Missing required field '{field}'")
        if errors:
            return errors

        names = df['command'].astype(str).str.strip().str.lower()
        for row, name in names.items():
            if name not in COMMAND_NAMES:
                errors.append(f"{source}: row {row}: unknown command '{name}'")

        for row, raw in df['value'].items():
            value, problem = PlanSchema.parse_value(raw)
            if problem is not None:
                errors.append(f"{source}: row {row}: value {raw!r} {problem}")
            elif names[row] == 'stow' and value < 0:
                errors.append(f"{source}: row {row}: stow amount must be non-negative")

        return errors
