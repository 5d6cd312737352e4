# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Generate partial types, builders and field accessors for records."""

from buildable.model import Diagnostic, FieldDescriptor, GeneratedArtifact, RecordDescriptor
from buildable.model_builder import InvalidFieldName, InvariantViolated, ModelBuilder
from buildable.pipeline import GenerationPipeline, GenerationReport, PreconditionNotMet
from buildable.runtime import gen_buildable
from buildable.synthesis import CodeSynthesisEngine
from buildable.type_expr import MalformedTypeExpression, TypeExpr, parse_type

__all__ = [
    "CodeSynthesisEngine",
    "Diagnostic",
    "FieldDescriptor",
    "GeneratedArtifact",
    "GenerationPipeline",
    "GenerationReport",
    "InvalidFieldName",
    "InvariantViolated",
    "MalformedTypeExpression",
    "ModelBuilder",
    "PreconditionNotMet",
    "RecordDescriptor",
    "TypeExpr",
    "gen_buildable",
    "parse_type",
]
