# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Stuart Alldred.

"""Flat suite: no function literals below main, only steps, panics and recovers."""

from deferfuzz.core.generator_base import (
    INTERCEPTION,
    SCOPE,
    SIGNAL,
    STEP,
    GeneratorBase,
)


class Generator(GeneratorBase):
    """Recovers at this level always see nil; the catch-all still handles the panic."""

    WEIGHTS = {SCOPE: 0, INTERCEPTION: 3, STEP: 2, SIGNAL: 1}
