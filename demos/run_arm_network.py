"""
ARM NETWORK GROWTH DEMO
=======================

PURPOSE:
--------
Runs the whole chain on files from disk:
1. Parse the grammar (arm skeleton, inputs, templates, rules)
2. Expand the seed into a construction string
3. Grow the mass-spring network (seeded, reproducible)
4. Write masses.csv and connection_map.csv for the physics simulator
5. Optionally plot the network

Parser errors are printed with their line numbers; the run continues with
whatever could be understood, exactly as the library does.
"""

import argparse
import logging
import os
import sys

import numpy as np

from reservoir_arm.config import CONFIG
from reservoir_arm.export import to_connection_map_csv, to_masses_csv
from reservoir_arm.logging_config import setup_logging
from reservoir_arm.pipeline import build_network


def _read_seed(value: str) -> str:
    """A seed argument is a file path if such a file exists, else the literal seed."""
    if os.path.isfile(value):
        with open(value, encoding='utf-8') as f:
            return f.read().strip()
    return value


def _print_errors(stage: str, errors) -> None:
    for error in errors:
        print(f"  [{stage}] {error.line_index}: {error.message}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description='Grow a mass-spring network on a robot arm from a grammar',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python demos/run_arm_network.py demos/arm.grammar "A(2){B}" --seed 42
  python demos/run_arm_network.py demos/arm.grammar seed.txt --plot

This will generate:
  - artifacts/masses.csv
  - artifacts/connection_map.csv
  - artifacts/network.png (with --plot)
        """
    )

    parser.add_argument('grammar', help='Path to the grammar DSL file')
    parser.add_argument('initialisation', help='Seed string, or a file containing it')
    parser.add_argument(
        '--seed',
        type=int,
        default=CONFIG.default_seed,
        help=f'Random seed for reproducibility (default: {CONFIG.default_seed})'
    )
    parser.add_argument(
        '--out',
        default='artifacts',
        help='Output directory (default: artifacts)'
    )
    parser.add_argument('--plot', action='store_true', help='Also write network.png')
    parser.add_argument('--verbose', action='store_true', help='Debug logging')

    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    with open(args.grammar, encoding='utf-8') as f:
        grammar_text = f.read()
    seed_text = _read_seed(args.initialisation)

    print("=" * 70)
    print("ARM NETWORK GROWTH")
    print("=" * 70)

    result = build_network(grammar_text, seed_text, np.random.default_rng(args.seed))
    graph = result.model.graph

    print(f"Construction string: {result.construction}")
    print(f"Masses: {len(graph.masses)}  Springs: {len(graph.springs)}")

    if result.has_errors:
        print("Errors:")
        _print_errors("grammar", result.grammar_errors)
        _print_errors("seed", result.seed_errors)
        _print_errors("construction", result.construction_errors)

    os.makedirs(args.out, exist_ok=True)

    masses_path = os.path.join(args.out, 'masses.csv')
    with open(masses_path, 'w', encoding='utf-8', newline='') as f:
        f.write(to_masses_csv(graph))

    connections_path = os.path.join(args.out, 'connection_map.csv')
    with open(connections_path, 'w', encoding='utf-8', newline='') as f:
        f.write(to_connection_map_csv(graph))

    print(f"Masses saved to: {masses_path}")
    print(f"Connection map saved to: {connections_path}")

    if args.plot:
        from reservoir_arm.viz import save_network_plot

        plot_path = os.path.join(args.out, 'network.png')
        save_network_plot(graph, plot_path, expansion_range_x=result.model.expansion_range_x)
        print(f"Plot saved to: {plot_path}")

    return 1 if result.has_errors else 0


if __name__ == "__main__":
    sys.exit(main())
