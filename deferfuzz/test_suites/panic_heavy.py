# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Stuart Alldred.

"""Panic-heavy suite: frequent panics, so deferred calls often repanic during unwind."""

from deferfuzz.core.generator_base import (
    INTERCEPTION,
    SCOPE,
    SIGNAL,
    STEP,
    GeneratorBase,
)


class Generator(GeneratorBase):
    WEIGHTS = {SCOPE: 4, INTERCEPTION: 3, STEP: 1, SIGNAL: 3}
