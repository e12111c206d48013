# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Stuart Alldred.

"""Default suite: the original mix of nested scopes, recovers, steps and panics."""

from deferfuzz.core.generator_base import GeneratorBase


class Generator(GeneratorBase):
    """GeneratorBase weights unchanged."""
