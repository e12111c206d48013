# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Stuart Alldred.

"""Run the external Go toolchain on a generated program and classify the outcome."""

from __future__ import annotations

import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from deferfuzz.core.emitter import EmissionError

_HAVE_WANT = re.compile(r"have (\S+), want (\S+)")


@dataclass
class RunResult:
    returncode: int
    output: str


class ProgramFailure(RuntimeError):
    """A generated program failed at run time: the behaviour disagreed with the model."""

    def __init__(
        self,
        iteration: int | None,
        returncode: int,
        output: str,
        path: Path | None = None,
    ) -> None:
        self.iteration = iteration
        self.returncode = returncode
        self.output = output
        self.path = path
        self.have, self.want = parse_mismatch(output)
        where = f"iteration {iteration}" if iteration is not None else "program"
        detail = (
            f"have {self.have}, want {self.want}"
            if self.want is not None
            else f"exit code {returncode}"
        )
        super().__init__(f"{where} failed ({detail}): {path}")


def parse_mismatch(output: str) -> tuple[str | None, str | None]:
    """(observed, expected) from the runtime's "have X, want Y" diagnostic, if present."""
    m = _HAVE_WANT.search(output)
    if m is None:
        return None, None
    return m.group(1), m.group(2)


def format_command(template: Sequence[str], path: Path) -> list[str]:
    return [arg.replace("{path}", str(path)) for arg in template]


def run_command(template: Sequence[str], path: Path, timeout: float) -> RunResult:
    """Run one toolchain command on path. Timeouts exit 124, a missing executable 127."""
    cmd = format_command(template, path)
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except subprocess.TimeoutExpired:
        return RunResult(124, f"timed out after {timeout}s")
    except OSError as e:
        return RunResult(127, f"cannot run {cmd[0]}: {e}")
    return RunResult(proc.returncode, (proc.stdout + proc.stderr).strip())


def check_syntax(template: Sequence[str], path: Path, timeout: float) -> None:
    """Raise EmissionError if the syntax check command rejects the program."""
    result = run_command(template, path, timeout)
    if result.returncode != 0:
        raise EmissionError(f"Generated program does not parse ({path}):\n{result.output}")


def run_program(
    template: Sequence[str],
    path: Path,
    timeout: float,
    iteration: int | None = None,
) -> RunResult:
    """Execute the program; raise ProgramFailure on nonzero exit or timeout."""
    result = run_command(template, path, timeout)
    if result.returncode != 0:
        raise ProgramFailure(iteration, result.returncode, result.output, path)
    return result
