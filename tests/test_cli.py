"""Command-line runner"""
import json

import pytest

from steam_train_fuel.scripts.run_simulation import main
from steam_train_fuel.src.goal import GoalSpec
from steam_train_fuel.src.reporting import format_summary, validate_summary_artifacts
from steam_train_fuel.src.simulation import MAX_STEPS_REACHED, STRATEGY_EXHAUSTED, simulate
from steam_train_fuel.src.strategy import RandomStrategy
from steam_train_fuel.tests.fixtures.plans import single_cache_plan, write_plan_json


class TestRunSimulation:

    def test_scenario_600_succeeds(self, capsys):
        assert main(['--scenario', '600', '--quiet']) == 0
        out = capsys.readouterr().out
        assert out.strip() == "fuel_used = 1000, steps = 5"

    def test_default_scenario_is_800(self, capsys):
        assert main([]) == 1
        out = capsys.readouterr().out
        assert out.startswith('FAILURE @600:: "strategy returned None"\nfuel_used = 1000, steps = 5')
        # one rendering per state
        assert out.count(" @ ") == 6
        assert "^[100 stash @200]" in out

    def test_plan_file_with_goal_override(self, tmp_path, capsys):
        path = write_plan_json(single_cache_plan(), tmp_path)
        assert main(['--plan', str(path), '--destination', '600', '--quiet']) == 0
        assert "steps = 5" in capsys.readouterr().out

    def test_trivial_goal_is_an_error(self, capsys):
        assert main(['--scenario', '600', '--destination', '400']) == 2
        assert "illegal trivial goal" in capsys.readouterr().err

    def test_invalid_plan_is_an_error(self, tmp_path, capsys):
        path = tmp_path / "plan.json"
        path.write_text(json.dumps(["jump 5"]))
        assert main(['--plan', str(path)]) == 2
        assert "unknown command 'jump'" in capsys.readouterr().err

    def test_flat_strategy(self, capsys):
        assert main(['--strategy', 'flat', '--quiet']) == 1
        assert "strategy returned None" in capsys.readouterr().out

    def test_random_strategy_with_step_limit(self, capsys):
        code = main(['--strategy', 'random', '--seed', '5', '--max-steps', '3', '--quiet'])
        # at most 250 per move from the default params: 800 is out of reach in 3 steps
        assert code == 1
        expected = simulate(GoalSpec(500, 800), RandomStrategy(seed=5, max_distance=250), max_steps=3)
        assert capsys.readouterr().out.strip() == format_summary(expected)
        assert expected.error in (MAX_STEPS_REACHED, STRATEGY_EXHAUSTED)
        if expected.error == MAX_STEPS_REACHED:
            assert expected.steps == 3

    def test_params_overrides_file(self, tmp_path, capsys):
        overrides = tmp_path / "overrides.json"
        overrides.write_text(json.dumps({'general': {'strategy_mode': 'flat'}}))
        assert main(['--params', str(overrides), '--quiet']) == 1
        assert "steps = 0" in capsys.readouterr().out

    def test_unknown_override_key(self, tmp_path, capsys):
        overrides = tmp_path / "overrides.json"
        overrides.write_text(json.dumps({'bogus': 1}))
        assert main(['--params', str(overrides)]) == 2

    def test_debug_events_echo(self, tmp_path, capsys):
        overrides = tmp_path / "overrides.json"
        overrides.write_text(json.dumps({'general': {'debug_events': True}}))
        main(['--scenario', '600', '--params', str(overrides), '--quiet'])
        assert "[SIM_LOG] goal_reached" in capsys.readouterr().out

    def test_output_dir(self, tmp_path, capsys):
        out_dir = tmp_path / "run"
        assert main(['--scenario', '600', '--quiet', '--output-dir', str(out_dir)]) == 0
        result = validate_summary_artifacts(out_dir / "artifacts")
        assert result.passed, result.failures
        with open(out_dir / "params_used.json") as f:
            assert json.load(f)['goal']['capacity'] == 500
