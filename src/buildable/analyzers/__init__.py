# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Declaration sources for the buildable generator."""

from buildable.analyzers.manifest import ManifestDeclarationSource
from buildable.analyzers.python import PythonDeclarationAnalyzer

__all__ = ["ManifestDeclarationSource", "PythonDeclarationAnalyzer"]
