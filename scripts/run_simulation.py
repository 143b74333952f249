"""
Simulation Runner
Runs a strategy (scripted plan, flat or random baseline) against a goal, prints the
summary and the state after every command, and optionally writes run artifacts.
"""
import argparse
import sys
from pathlib import Path

from steam_train_fuel.config.params_loader import ParamsLoader
from steam_train_fuel.src.data.loader import PlanLoader
from steam_train_fuel.src.errors import PlanValidationError
from steam_train_fuel.src.goal import GoalSpec
from steam_train_fuel.src.reporting import ReportGenerator, format_summary, render_train
from steam_train_fuel.src.scenarios import SCENARIOS, get_scenario
from steam_train_fuel.src.simulation import simulate
from steam_train_fuel.src.strategy import STRATEGY_MODES, build_strategy

DEFAULT_SCENARIO = '800'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Simulate a steam train caching fuel on its way to a destination')
    parser.add_argument('--scenario', choices=sorted(SCENARIOS), help='Built-in goal and plan')
    parser.add_argument('--plan', type=str, help='Command plan file (.json or .csv)')
    parser.add_argument('--capacity', type=int, help='Tank capacity (overrides params)')
    parser.add_argument('--destination', type=int, help='Destination marker (overrides params)')
    parser.add_argument('--strategy', choices=STRATEGY_MODES, help='Strategy mode (overrides params)')
    parser.add_argument('--max-steps', type=int, help='Simulation step limit (overrides params)')
    parser.add_argument('--seed', type=int, help='Seed for the random strategy')
    parser.add_argument('--params', type=str, help='JSON overrides for base_params.json')
    parser.add_argument('--output-dir', type=str, help='Write run artifacts to this directory')
    parser.add_argument('--quiet', action='store_true', help='Only print the summary')
    return parser


def resolve_run(args, params: ParamsLoader):
    """Goal and command plan for the requested run (plan is None for non-scripted modes)"""
    mode = args.strategy or params.get('general', 'strategy_mode', default='scripted')

    if args.scenario is not None:
        goal, plan = get_scenario(args.scenario)
    elif args.plan is not None:
        goal, plan = GoalSpec.from_params(params), PlanLoader(args.plan).load()
    elif mode == 'scripted':
        goal, plan = get_scenario(DEFAULT_SCENARIO)
    else:
        goal, plan = GoalSpec.from_params(params), None

    if args.capacity is not None or args.destination is not None:
        goal = GoalSpec(
            capacity=args.capacity if args.capacity is not None else goal.capacity,
            destination=args.destination if args.destination is not None else goal.destination,
        )
    return goal, plan, mode


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {}
    if args.seed is not None:
        overrides['general'] = {'random_seed': args.seed}
    if args.max_steps is not None:
        overrides['simulation'] = {'max_steps': args.max_steps}

    try:
        params = ParamsLoader(overrides_path=args.params, overrides=overrides)
        goal, plan, mode = resolve_run(args, params)
        strategy = build_strategy(params, commands=plan, mode=mode)
    except (FileNotFoundError, KeyError, TypeError, ValueError) as e:
        # PlanValidationError and TrivialGoalError are ValueErrors
        if isinstance(e, PlanValidationError):
            for error in e.errors:
                print(f"ERROR: {error}", file=sys.stderr)
        else:
            print(f"ERROR: {e}", file=sys.stderr)
        return 2

    summary = simulate(
        goal,
        strategy,
        max_steps=params.get('simulation', 'max_steps'),
        echo_events=bool(params.get('general', 'debug_events', default=False)),
    )

    print(format_summary(summary))
    if not args.quiet:
        step = params.get('display', 'step')
        major_tick = params.get('display', 'major_tick')
        for state in summary.states:
            print(render_train(state, step=step, major_tick=major_tick))
            print()

    if args.output_dir:
        artifacts_dir = ReportGenerator(args.output_dir).generate_all(summary, params=params.snapshot())
        print(f"Artifacts written to {Path(artifacts_dir)}")

    return 0 if summary.succeeded else 1


if __name__ == '__main__':
    sys.exit(main())
