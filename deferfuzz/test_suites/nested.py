# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Stuart Alldred.

"""Nested suite: function literals dominate, producing deep call trees."""

from deferfuzz.core.generator_base import (
    INTERCEPTION,
    SCOPE,
    SIGNAL,
    STEP,
    GeneratorBase,
)


class Generator(GeneratorBase):
    WEIGHTS = {SCOPE: 8, INTERCEPTION: 2, STEP: 1, SIGNAL: 1}
