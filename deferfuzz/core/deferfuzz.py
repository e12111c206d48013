# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Stuart Alldred.

"""DeferFuzz main loop: generate, simulate, emit and run self-checking Go programs."""

from __future__ import annotations

import logging
import random
import sys
import time
from pathlib import Path

from deferfuzz.core.emitter import emit_program
from deferfuzz.core.fuzz_config import FuzzConfig, get_default_config_path, load_fuzz_config
from deferfuzz.core.simulator import simulate_program
from deferfuzz.core.toolchain import check_syntax, run_program
from deferfuzz.core.tree import Scope, count_leaves, scope_depth, tree_to_dict


class DeferFuzz:
    """Defer/panic/recover fuzzer main class."""

    def __init__(
        self,
        generator: object | None = None,
        generator_factory: object | None = None,
        seed: int = 42,
        output: Path | None = None,
        verbosity: str = "info",
        config: Path | FuzzConfig | None = None,
        budget: int | None = None,
    ) -> None:
        if generator is None and generator_factory is None:
            raise ValueError("Provide generator or generator_factory")
        self._generator_factory = generator_factory
        self.generator = generator
        self.seed = seed
        self.output = output or Path("test.go")

        self.log = logging.getLogger("deferfuzz")
        if not self.log.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setLevel(logging.DEBUG)
            handler.setFormatter(
                logging.Formatter("%(asctime)s - %(name)-20s - %(levelname)s - %(message)s")
            )
            self.log.addHandler(handler)
        self.log.setLevel(getattr(logging, verbosity.upper()))
        self.debug = self.log.debug
        self.info = self.log.info
        self.warning = self.log.warning
        self.error = self.log.error

        self.random = random.Random()
        self.random.seed(self.seed)

        if isinstance(config, FuzzConfig):
            self.config = config
        else:
            config_path = config if config is not None else get_default_config_path()
            self.config = load_fuzz_config(config_path)
        self.budget = budget if budget is not None else self.config.budget

        self.tree: Scope | None = None
        self.steps = 0
        self.faults = 0

        if self.generator is None and self._generator_factory is not None:
            self.generator = self._generator_factory(self)

    def create_test(self) -> Scope:
        """Generate a tree and stamp it with the values the program must observe."""
        start = time.time()
        tree = self.generator.gen()
        sim = simulate_program(tree, self.log.getChild("simulator"))
        self.tree, self.steps, self.faults = tree, sim.steps, sim.faults
        self.debug(
            f"Generated {count_leaves(tree)} actions, depth {scope_depth(tree)}, "
            f"{sim.steps} steps, {sim.faults} faults in {(time.time() - start) * 1000:.1f} ms"
        )
        return tree

    def write_go(self) -> None:
        with open(self.output, "w") as f:
            f.write(emit_program(self.tree))

    def run(self) -> None:
        """Create test and write output."""
        self.create_test()
        self.write_go()

    def execute(self, iteration: int | None = None) -> None:
        """Check and run the written program; raises EmissionError or ProgramFailure."""
        if self.config.check is not None:
            check_syntax(self.config.check, self.output, self.config.timeout)
        run_program(self.config.run, self.output, self.config.timeout, iteration)

    def fuzz(self, iterations: int | None = None) -> int:
        """Generate and run programs until one fails or iterations are done."""
        done = 0
        while iterations is None or done < iterations:
            self.info(f"Iteration {done}")
            self.run()
            self.execute(done)
            done += 1
        self.info(f"Completed {done} iterations")
        return done

    def write_debug_yaml(self, path: Path) -> None:
        """Write debug YAML with the last stamped tree and its counters."""
        import yaml

        out = {
            "seed": self.seed,
            "generator": getattr(self.generator, "name", type(self.generator).__name__),
            "budget": self.budget,
            "steps": self.steps,
            "faults": self.faults,
            "tree": tree_to_dict(self.tree) if self.tree is not None else None,
        }
        with open(path, "w") as f:
            yaml.dump(out, f, default_flow_style=False, sort_keys=False)
