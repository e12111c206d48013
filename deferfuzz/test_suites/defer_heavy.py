# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Stuart Alldred.

"""Defer-heavy suite: most entries are deferred, giving long unwind chains."""

from deferfuzz.core.generator_base import GeneratorBase


class Generator(GeneratorBase):
    DEFER_PROBABILITY = 0.75
