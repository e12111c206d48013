# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Stuart Alldred.

"""CLI entry point for deferfuzz."""

import importlib
import sys
from pathlib import Path

from deferfuzz.core.deferfuzz import DeferFuzz
from deferfuzz.core.emitter import EmissionError
from deferfuzz.core.simulator import SimulationError
from deferfuzz.core.toolchain import ProgramFailure

# Named test suites (deferfuzz.test_suites.<name>.Generator)
TEST_SUITE_NAMES = (
    "default",
    "panic_heavy",
    "defer_heavy",
    "nested",
    "flat",
)


def get_generator_from_suite(name: str):
    """Load Generator class from deferfuzz.test_suites.<name>."""
    mod = importlib.import_module(f"deferfuzz.test_suites.{name}")
    return mod.Generator


def main() -> None:
    import argparse

    parser = argparse.ArgumentParser(
        description="deferfuzz - Go defer/panic/recover Program Generator"
    )
    parser.add_argument("--output", "-o", type=Path, default=Path("test.go"))
    parser.add_argument("--seed", "-s", type=int, default=42)
    parser.add_argument(
        "--verbosity",
        "-v",
        default="info",
        choices=["debug", "info", "warning", "error"],
    )
    parser.add_argument(
        "--generator",
        "-g",
        type=str,
        default="default",
        choices=TEST_SUITE_NAMES,
        help="Named test suite. e.g. default, panic_heavy, nested.",
    )
    parser.add_argument(
        "--budget",
        "-b",
        type=int,
        default=None,
        help="Fuel for each generated program. Default: from config (100).",
    )
    parser.add_argument(
        "--iterations",
        "-n",
        type=int,
        default=0,
        help="Programs to generate and run; 0 runs until the first failure.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        metavar="FILE",
        help="Fuzz config YAML (budget, toolchain commands). Default: built-in config.",
    )
    parser.add_argument(
        "--debug-yaml",
        type=Path,
        default=None,
        metavar="FILE",
        help="Optional: write the last stamped tree as YAML to FILE",
    )
    parser.add_argument(
        "--no-run",
        action="store_true",
        help="Generate and write one program without invoking the toolchain.",
    )
    args = parser.parse_args()

    if args.budget is not None and args.budget < 0:
        parser.error("--budget must be non-negative")

    def make_generator(fuzz: object):
        gen_cls = get_generator_from_suite(args.generator)
        return gen_cls(fuzz)

    try:
        fuzz = DeferFuzz(
            generator_factory=make_generator,
            seed=args.seed,
            output=args.output,
            verbosity=args.verbosity,
            config=args.config,
            budget=args.budget,
        )
    except ValueError as e:
        print(f"deferfuzz: error: {e}", file=sys.stderr)
        sys.exit(2)

    try:
        if args.no_run:
            fuzz.run()
            fuzz.info(f"Wrote {args.output}")
        else:
            fuzz.fuzz(args.iterations or None)
    except ProgramFailure as e:
        fuzz.error(str(e))
        if e.output:
            fuzz.error(e.output)
        sys.exit(1)
    except (SimulationError, EmissionError) as e:
        fuzz.error(f"Internal defect: {e}")
        sys.exit(1)
    finally:
        if args.debug_yaml is not None and fuzz.tree is not None:
            fuzz.write_debug_yaml(args.debug_yaml)
            fuzz.info(f"Wrote debug YAML to {args.debug_yaml}")


if __name__ == "__main__":
    main()
