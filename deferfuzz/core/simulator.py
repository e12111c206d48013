# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Stuart Alldred.

"""Reference model of defer/panic/recover: stamps every reached action with its expected value."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from deferfuzz.core.tree import Action, Interception, Scope, Signal, Step, iter_actions


class SimulationError(AssertionError):
    """The generated tree or the model broke an invariant; the fuzzer itself is at fault."""


@dataclass
class FaultCell:
    """Mutable fault slot (0 = none) shared between a scope and what it defers."""

    value: int = 0


class Simulator:
    """
    Walks a scope tree the way the Go runtime executes it.

    Immediate entries run in order until one leaves a fault active. Deferred
    entries are only registered during the walk and then run in reverse, with
    the scope's fault cell as their inbound fault so a recover inside them can
    clear it. Step and fault counters are shared across the whole tree.
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        self.steps = 0
        self.faults = 0
        self.log = log if log is not None else logging.getLogger("deferfuzz.simulator")

    def run(self, scope: Scope, inbound: FaultCell) -> int:
        """Simulate one invocation of scope; return the fault still propagating."""
        active = FaultCell()
        pending: list[Action] = []

        for entry in scope.body:
            if entry.deferred:
                if isinstance(entry.action, Interception):
                    raise SimulationError("Deferred Interception has no defined meaning")
                pending.append(entry.action)
                continue
            self._call(entry.action, inbound, FaultCell(), active)
            if active.value:
                break

        for action in reversed(pending):
            self._call(action, inbound, active, active)

        return active.value

    def _call(
        self,
        action: Action,
        inbound: FaultCell,
        nested_inbound: FaultCell,
        active: FaultCell,
    ) -> None:
        if isinstance(action, Step):
            self.steps += 1
            action.n = self.steps
        elif isinstance(action, Signal):
            self.faults += 1
            action.n = self.faults
            active.value = action.n
            self.log.debug(f"fault {action.n} raised")
        elif isinstance(action, Interception):
            action.n = inbound.value
            inbound.value = 0
            if action.n:
                self.log.debug(f"fault {action.n} recovered")
        elif isinstance(action, Scope):
            outbound = self.run(action, nested_inbound)
            if outbound:
                active.value = outbound
        else:
            raise TypeError(f"Unknown action {action!r}")


def check_stamps(root: Scope, steps: int, faults: int) -> None:
    """Stamped step and fault numbers must be exactly 1..steps and 1..faults."""
    step_ns = sorted(a.n for a in iter_actions(root) if isinstance(a, Step) and a.n is not None)
    fault_ns = sorted(a.n for a in iter_actions(root) if isinstance(a, Signal) and a.n is not None)
    if step_ns != list(range(1, steps + 1)):
        raise SimulationError(f"Step numbers are not 1..{steps}: {step_ns}")
    if fault_ns != list(range(1, faults + 1)):
        raise SimulationError(f"Fault numbers are not 1..{faults}: {fault_ns}")


def simulate_program(root: Scope, log: logging.Logger | None = None) -> Simulator:
    """Stamp root in place and check that nothing escapes main."""
    sim = Simulator(log)
    inbound = FaultCell()
    outbound = sim.run(root, inbound)
    if inbound.value != 0 or outbound != 0:
        raise SimulationError(
            f"Program does not quiesce: inbound {inbound.value}, outbound {outbound}"
        )
    check_stamps(root, sim.steps, sim.faults)
    return sim
