"""
Command-line interface for the Mars lander simulator.

Usage:
    # List the scenario presets
    python -m mls --list

    # Descent from 10 km with the autopilot on, 600 s max
    python -m mls --scenario 1 --autopilot --t-max 600

    # Resume from a saved state, write telemetry and a plot
    python -m mls --state run.json --csv run.csv --plot run.png
"""

import argparse
import json
import logging
import sys

from mls.core.errors import LanderSimError
from mls.lander.constants import load_constants, mars_lander_constants_default
from mls.lander.scenarios import list_scenarios, load_scenario, get_scenario
from mls.lander.simulate import LanderSimConfig, simulate_lander
from mls.lander.state import load_state, save_state

logger = logging.getLogger("mls")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="mls",
        description="Simulate a lander descending to (or orbiting) Mars.",
    )
    parser.add_argument("--list", action="store_true",
                        help="List scenario presets and exit")
    parser.add_argument("--scenario", type=int, default=1,
                        help="Scenario preset index (default: 1)")
    parser.add_argument("--state", type=str, default=None,
                        help="Start from a saved JSON state instead of a preset")
    parser.add_argument("--constants", type=str, default=None,
                        help="JSON file overriding physical constants")
    parser.add_argument("--t-max", type=float, default=1000.0,
                        help="Maximum simulated time [s] (default: 1000)")
    parser.add_argument("--record-every", type=int, default=10,
                        help="Telemetry stride in ticks (default: 10)")
    autopilot = parser.add_mutually_exclusive_group()
    autopilot.add_argument("--autopilot", dest="autopilot", action="store_true",
                           default=None, help="Force the autopilot on")
    autopilot.add_argument("--no-autopilot", dest="autopilot", action="store_false",
                           help="Force the autopilot off")
    parser.add_argument("--save-state", type=str, default=None,
                        help="Write the final state to this JSON file")
    parser.add_argument("--csv", type=str, default=None,
                        help="Write the telemetry time history to CSV")
    parser.add_argument("--plot", type=str, default=None,
                        help="Save a descent plot (PNG)")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="More logging (-v info, -vv debug)")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.list:
        for index, name in list_scenarios():
            print(f"{index}: {name}")
        return 0

    try:
        if args.constants:
            constants = load_constants(args.constants)
        else:
            constants = mars_lander_constants_default()

        if args.state:
            state = load_state(args.state)
            name = args.state
        else:
            state = load_scenario(args.scenario, constants)
            name = get_scenario(args.scenario).name

        if args.autopilot is not None:
            state.autopilot_enabled = args.autopilot

        cfg = LanderSimConfig(
            state=state,
            constants=constants,
            t_max_s=args.t_max,
            record_every=args.record_every,
            name=name,
        )
        result = simulate_lander(cfg)
    except (LanderSimError, OSError) as e:
        logger.error("%s", e)
        return 1

    if args.save_state:
        save_state(args.save_state, result.final_state)
    if args.csv:
        result.df.to_csv(args.csv, index=False)
    if args.plot:
        from mls.plots import plot_descent
        plot_descent(result, path=args.plot)

    print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
