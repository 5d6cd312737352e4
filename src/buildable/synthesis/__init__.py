# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Code synthesis for partial types, builders and field accessors."""

from buildable.synthesis.engine import CodeSynthesisEngine, SynthesisError

__all__ = ["CodeSynthesisEngine", "SynthesisError"]
