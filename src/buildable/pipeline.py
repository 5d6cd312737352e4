# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Per-record generation pipeline: preconditions, model build, synthesis, sink."""

import logging
from dataclasses import dataclass, field

from buildable.declaration import RawDeclaration
from buildable.model import Diagnostic, GeneratedArtifact
from buildable.model_builder import InvalidFieldName, ModelBuilder
from buildable.sink import ArtifactSink
from buildable.synthesis import CodeSynthesisEngine, SynthesisError
from buildable.type_expr import MalformedTypeExpression

logger = logging.getLogger(__name__)

ANNOTATION_NAME = "gen_buildable"


class PreconditionNotMet(RuntimeError):
    """Represent a declaration that cannot receive generated code."""


@dataclass
class GenerationReport:
    """Collect the outcome of one pipeline run.

    Attributes:
        artifacts: Artifacts handed to the sink, in input order.
        diagnostics: Warnings for skipped records and errors for failed ones.
        skipped: Fully qualified names of records skipped with a warning.
        failed: Fully qualified names of records that failed with an error.
    """

    artifacts: list[GeneratedArtifact] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(diagnostic.severity == "error" for diagnostic in self.diagnostics)


def check_preconditions(declaration: RawDeclaration) -> None:
    """Check that a declaration can receive generated code.

    Args:
        declaration: Candidate declaration.

    Raises:
        PreconditionNotMet: If the declaration is not a record type or has no
            companion scope.
    """
    if not declaration.is_record_type:
        raise PreconditionNotMet(
            f"@{ANNOTATION_NAME} can only be applied to record types. "
            f"No sources will be generated for {declaration.name}."
        )
    if not declaration.has_companion_scope:
        raise PreconditionNotMet(
            f"@{ANNOTATION_NAME} can only be applied to records with a companion scope. "
            f"No sources will be generated for {declaration.name}."
        )


class GenerationPipeline:
    """Run model building and synthesis for each candidate declaration."""

    def __init__(
        self,
        sink: ArtifactSink,
        model_builder: ModelBuilder | None = None,
        engine: CodeSynthesisEngine | None = None,
    ) -> None:
        self._sink = sink
        self._model_builder = model_builder or ModelBuilder()
        self._engine = engine or CodeSynthesisEngine()

    def run(self, declarations: list[RawDeclaration]) -> GenerationReport:
        """Process candidate declarations independently.

        Args:
            declarations: Candidate declarations from the host.

        Returns:
            Report of artifacts and diagnostics.

        Raises:
            InvariantViolated: If the host hands over a declaration without a
                primary field list.
            SinkError: If the sink cannot store an artifact.
        """
        report = GenerationReport()
        for declaration in declarations:
            artifact = self.process(declaration, report)
            if artifact is None:
                continue
            self._sink.write(artifact)
            report.artifacts.append(artifact)

        logger.info(
            f"Generation completed (candidates={len(declarations)} "
            f"generated={len(report.artifacts)} skipped={len(report.skipped)} "
            f"failed={len(report.failed)})"
        )
        return report

    def process(
        self, declaration: RawDeclaration, report: GenerationReport
    ) -> GeneratedArtifact | None:
        """Process one declaration, recording diagnostics on ``report``.

        Args:
            declaration: Candidate declaration.
            report: Report receiving diagnostics.

        Returns:
            Generated artifact, or ``None`` when the record was skipped or failed.
        """
        try:
            check_preconditions(declaration)
        except PreconditionNotMet as exc:
            logger.warning(
                f"Skipping declaration (record={declaration.fully_qualified_name} reason={exc})"
            )
            report.diagnostics.append(
                Diagnostic(severity="warning", message=str(exc), location=declaration.location)
            )
            report.skipped.append(declaration.fully_qualified_name)
            return None

        try:
            record = self._model_builder.build_record(declaration)
        except MalformedTypeExpression as exc:
            report.diagnostics.append(self._malformed_type_diagnostic(declaration, exc))
            report.failed.append(declaration.fully_qualified_name)
            return None
        except InvalidFieldName as exc:
            report.diagnostics.append(self._invalid_field_diagnostic(declaration, exc))
            report.failed.append(declaration.fully_qualified_name)
            return None

        try:
            return self._engine.synthesize(record)
        except SynthesisError as exc:
            logger.error(
                f"Synthesis failed (record={declaration.fully_qualified_name} error={exc})"
            )
            report.diagnostics.append(
                Diagnostic(severity="error", message=str(exc), location=declaration.location)
            )
            report.failed.append(declaration.fully_qualified_name)
            return None

    def _malformed_type_diagnostic(
        self, declaration: RawDeclaration, exc: MalformedTypeExpression
    ) -> Diagnostic:
        location = declaration.location
        field_name = None
        for raw_field in declaration.fields or ():
            if raw_field.raw_type_text == exc.text:
                field_name = raw_field.name
                location = raw_field.location or location
                break
        logger.error(
            f"Malformed field type (record={declaration.fully_qualified_name} "
            f"field={field_name} type={exc.text!r})"
        )
        return Diagnostic(
            severity="error",
            message=f"Field {field_name!r} of {declaration.fully_qualified_name}: {exc}",
            location=location,
        )

    def _invalid_field_diagnostic(
        self, declaration: RawDeclaration, exc: InvalidFieldName
    ) -> Diagnostic:
        location = declaration.location
        for raw_field in declaration.fields or ():
            if raw_field.name == exc.field_name:
                location = raw_field.location or location
                break
        logger.error(
            f"Invalid field name (record={declaration.fully_qualified_name} "
            f"field={exc.field_name!r})"
        )
        return Diagnostic(severity="error", message=str(exc), location=location)
