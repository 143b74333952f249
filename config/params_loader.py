"""Load simulation parameters from base_params.json with optional overrides"""
import json
from pathlib import Path
from typing import Any, Dict, Optional
import copy
import warnings


DEFAULT_PARAMS_PATH = Path(__file__).parent / "base_params.json"


class ParamsLoader:
    """Single source of truth for simulation parameters"""

    def __init__(self, base_path: Optional[Path] = None, overrides_path: Optional[Path] = None, overrides: Dict[str, Any] = None, strict: bool = True):
        self.base_path = Path(base_path) if base_path is not None else DEFAULT_PARAMS_PATH

        with open(self.base_path, 'r') as f:
            self._params = json.load(f)

        # File overrides apply first, dict overrides win over both
        if overrides_path is not None:
            with open(overrides_path, 'r') as f:
                file_overrides = json.load(f)
            self._params = self._merge(self._params, file_overrides, strict=strict)

        if overrides:
            self._params = self._merge(self._params, overrides, strict=strict)

    def _merge(self, base: Any, override: Any, strict: bool = True, path: str = "") -> Any:
        """
        Merge an override tree into the base tree.

        Rules:
        - dict + dict -> recursive merge
        - lists and scalars in override -> replace
        - unknown key -> KeyError in strict mode, warning otherwise
        - type mismatch -> TypeError in strict mode (int/float and None are compatible)
        """
        if isinstance(base, dict) and isinstance(override, dict):
            merged = copy.deepcopy(base)
            for key, value in override.items():
                key_path = f"{path}.{key}" if path else key
                if key not in base:
                    if strict:
                        raise KeyError(f"Override key '{key_path}' does not exist in base params.")
                    warnings.warn(f"Override key '{key_path}' does not exist in base params. Adding it.")
                    merged[key] = value
                else:
                    merged[key] = self._merge(base[key], value, strict=strict, path=key_path)
            return merged

        if not isinstance(override, type(base)):
            both_numeric = (
                isinstance(base, (int, float)) and not isinstance(base, bool)
                and isinstance(override, (int, float)) and not isinstance(override, bool)
            )
            if not both_numeric and base is not None and override is not None:
                msg = f"Type mismatch at '{path}': expected {type(base).__name__}, got {type(override).__name__}"
                if strict:
                    raise TypeError(msg)
                warnings.warn(msg)

        return override

    def get(self, *keys: str, default: Any = None) -> Any:
        """Get a nested value by a sequence of keys"""
        value = self._params
        for key in keys:
            if not isinstance(value, dict):
                return default
            value = value.get(key, default)
        return value

    def snapshot(self) -> Dict[str, Any]:
        """Copy of the parameters used, for params_used.json"""
        return copy.deepcopy(self._params)
