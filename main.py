# main.py
import sys
import os
import json
import argparse
import logging
from fms.generator import generate_scenarios, SCENARIO_DEFINITIONS
from fms.engine import FactorySimulator
from fms.errors import SimulationError
from pydantic import ValidationError
from fms.report import render_report
from fms.config import SCENARIO_DIR, RECENT_EVENTS
from colorama import Fore, Style, init

init(autoreset=True)


def print_report(report, recent=RECENT_EVENTS):
    for line in render_report(report, recent=recent):
        if line.startswith("==="):
            print(f"{Fore.GREEN}{line}{Style.RESET_ALL}")
        elif "failed" in line:
            print(f"{Fore.RED}{line}{Style.RESET_ALL}")
        elif line.startswith("Overall") or line.startswith("Max"):
            print(f"{Fore.CYAN}{line}{Style.RESET_ALL}")
        else:
            print(line)


def run_simulation(scenario_file, years=None, seed=None, recent=RECENT_EVENTS, verbose=False):
    sim = FactorySimulator.from_file(scenario_file, seed=seed)
    if verbose:
        print(f"{Fore.CYAN}Running scenario {sim.config.id}: {sim.config.name}{Style.RESET_ALL}")
    report = sim.run(years)
    if verbose:
        print_report(report, recent=recent)
    return report


def run_baseline(seed=None):
    print(f"{Fore.MAGENTA}=== RUNNING BUNDLED SCENARIOS ==={Style.RESET_ALL}")
    generate_scenarios()

    if not os.path.exists("results"):
        os.makedirs("results")

    print(f"{'Scenario':<10} | {'Machines %':<12} | {'Adjusters %':<12} | {'Max Queue':<10}")
    print("-" * 55)

    results = {}
    for s_def in SCENARIO_DEFINITIONS:
        s_id = s_def['id']
        path = os.path.join(SCENARIO_DIR, f"{s_id}.json")
        report = run_simulation(path, seed=seed)
        color = Fore.GREEN if report.max_queue_length <= 1 else Fore.YELLOW
        print(f"{s_id:<10} | {report.overall_machine_utilization:<12.2f} | "
              f"{report.overall_adjuster_utilization:<12.2f} | "
              f"{color}{report.max_queue_length}{Style.RESET_ALL}")
        results[s_id] = report.model_dump(exclude={'timeline'})

    with open("results/baseline.json", "w") as f:
        json.dump(results, f, indent=2)
    print(f"\n{Fore.CYAN}Results saved to results/baseline.json{Style.RESET_ALL}")
    return results


def main(argv=None):
    parser = argparse.ArgumentParser(description="Factory maintenance simulator")
    parser.add_argument("--scenario", type=str, default=None, help="Scenario JSON file (default: all bundled scenarios)")
    parser.add_argument("--years", type=int, default=None, help="Years to simulate (overrides the scenario)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (overrides the scenario)")
    parser.add_argument("--events", type=int, default=RECENT_EVENTS, help="Number of recent events to show")
    parser.add_argument("--generate", action="store_true", help="Only write the bundled scenario files")
    parser.add_argument("--verbose", action="store_true", help="Log every failure, assignment and repair")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        if args.generate:
            for path in generate_scenarios():
                print(path)
        elif args.scenario:
            run_simulation(args.scenario, years=args.years, seed=args.seed,
                           recent=args.events, verbose=True)
        else:
            run_baseline(seed=args.seed)
    except (SimulationError, ValidationError, json.JSONDecodeError, OSError) as e:
        print(f"{Fore.RED}Error: {e}{Style.RESET_ALL}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
