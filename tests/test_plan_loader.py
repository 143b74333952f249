"""Plan files: JSON and CSV loading with schema validation"""
import json

import pandas as pd
import pytest

from steam_train_fuel.src.commands import StowFuel, Travel
from steam_train_fuel.src.data.loader import PlanLoader
from steam_train_fuel.src.data.schema import PlanSchema
from steam_train_fuel.src.errors import PlanValidationError
from steam_train_fuel.tests.fixtures.plans import single_cache_plan, write_plan_csv, write_plan_json


class TestPlanLoader:

    def test_json_dicts(self, tmp_path):
        path = write_plan_json(single_cache_plan(), tmp_path)
        assert PlanLoader(str(path)).load() == single_cache_plan()

    def test_json_text(self, tmp_path):
        path = write_plan_json(single_cache_plan(), tmp_path, as_text=True)
        assert PlanLoader(str(path)).load() == single_cache_plan()

    def test_json_object_with_commands_key(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text(json.dumps({'commands': ["travel 5", "stow 1"]}))
        assert PlanLoader(str(path)).load() == [Travel(5), StowFuel(1)]

    def test_csv(self, tmp_path):
        path = write_plan_csv(single_cache_plan(), tmp_path)
        assert PlanLoader(str(path)).load() == single_cache_plan()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            PlanLoader(str(tmp_path / "nope.json"))

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "plan.txt"
        path.write_text("travel 5\n")
        with pytest.raises(ValueError, match="Unsupported plan format"):
            PlanLoader(str(path)).load()

    def test_invalid_rows_reported(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text(json.dumps(["travel 5", "fly 10", "stow lots", "travel 2.5", "stow -3"]))
        with pytest.raises(PlanValidationError) as exc_info:
            PlanLoader(str(path)).load()
        errors = exc_info.value.errors
        assert len(errors) == 4
        assert any("unknown command 'fly'" in e for e in errors)
        assert any("is not numeric" in e for e in errors)
        assert any("is not an integer" in e for e in errors)
        assert any("must be non-negative" in e for e in errors)

    def test_non_list_json(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text(json.dumps("travel 5"))
        with pytest.raises(PlanValidationError):
            PlanLoader(str(path)).load()

    def test_extra_tokens_rejected(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text(json.dumps(["travel 10 999"]))
        with pytest.raises(PlanValidationError) as exc_info:
            PlanLoader(str(path)).load()
        assert exc_info.value.errors == ["plan.json: row 0: value '10 999' is not numeric"]

    @pytest.mark.parametrize("entry", [
        {"command": "travel", "value": True},
        {"command": "stow", "value": False},
        "travel 1e2",
        {"command": "travel", "value": "1e2"},
        {"command": "travel", "value": [5]},
    ])
    def test_non_integer_values_rejected(self, tmp_path, entry):
        path = tmp_path / "plan.json"
        path.write_text(json.dumps([entry]))
        with pytest.raises(PlanValidationError) as exc_info:
            PlanLoader(str(path)).load()
        assert len(exc_info.value.errors) == 1

    def test_integer_text_values(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text(json.dumps([{"command": "travel", "value": "+20"}, "travel -5"]))
        assert PlanLoader(str(path)).load() == [Travel(20), Travel(-5)]

    def test_empty_plan(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text("[]")
        assert PlanLoader(str(path)).load() == []


class TestPlanSchema:

    def test_missing_columns(self):
        errors = PlanSchema.validate_plan_frame(pd.DataFrame({'command': ['travel']}))
        assert errors == ["plan: Missing required field 'value'"]

    def test_valid_frame(self):
        df = pd.DataFrame({'command': ['travel', 'STOW'], 'value': [10, 3]})
        assert PlanSchema.validate_plan_frame(df) == []
