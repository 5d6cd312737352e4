# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Code synthesis engine mapping record descriptors to generated modules."""

import ast
import logging

from buildable.model import GeneratedArtifact, RecordDescriptor
from buildable.synthesis import companion, fields, names, nodes, partial

logger = logging.getLogger(__name__)

RESERVED_COMPANION_NAMES: frozenset[str] = frozenset({"builder", "buildable"})
RESERVED_PARTIAL_NAMES: frozenset[str] = frozenset({"build", "combine"})
RESERVED_FIELD_NAMES: frozenset[str] = RESERVED_COMPANION_NAMES | RESERVED_PARTIAL_NAMES

_RUNTIME_IMPORTS = [
    "BuildableBuilder",
    "BuildableCtx",
    "Field",
    "Lens",
    "Partial",
    "register",
]


class SynthesisError(RuntimeError):
    """Represent a record that cannot be turned into generated code."""


class CodeSynthesisEngine:
    """Generate partial, builder and field declarations for a record.

    Output depends only on the descriptor, so synthesizing the same record
    twice yields byte-identical text.
    """

    def synthesize(self, record: RecordDescriptor) -> GeneratedArtifact:
        """Synthesize and render the generated module for one record.

        Args:
            record: Record descriptor.

        Returns:
            Generated artifact with rendered declarations and target path.

        Raises:
            SynthesisError: If a field name collides with a generated member.
        """
        declarations = self.synthesize_declarations(record)
        module = self.synthesize_module(record, declarations)
        source_text = ast.unparse(module) + "\n"
        artifact = GeneratedArtifact(
            record_name=record.fully_qualified_name,
            partial_type_name=names.partial_name(record),
            generated_declarations=tuple(ast.unparse(node) for node in declarations),
            target_file=names.target_file(record),
            source_text=source_text,
        )
        logger.debug(
            f"Synthesized record (record={artifact.record_name} "
            f"declarations={len(declarations)} target={artifact.target_file})"
        )
        return artifact

    def synthesize_declarations(self, record: RecordDescriptor) -> list[ast.stmt]:
        """Build the structured declarations for one record, in emission order.

        Args:
            record: Record descriptor.

        Returns:
            Partial class, per-field lens classes, context class, context
            instance, companion class and registration call.

        Raises:
            SynthesisError: If a field name collides with a generated member.
        """
        clashes = sorted(
            field.name for field in record.fields if field.name in RESERVED_FIELD_NAMES
        )
        if clashes:
            raise SynthesisError(
                f"Field names clash with generated partial or companion members in "
                f"{record.fully_qualified_name}: {', '.join(clashes)}"
            )

        declarations: list[ast.stmt] = [partial.generate_partial_class(record)]
        for field in record.fields:
            declarations.extend(fields.generate_field(record, field))
        declarations.append(companion.generate_ctx(record))
        declarations.append(companion.generate_ctx_instance(record))
        declarations.append(companion.generate_companion(record))
        declarations.append(companion.generate_registration(record))
        return declarations

    def synthesize_module(
        self, record: RecordDescriptor, declarations: list[ast.stmt]
    ) -> ast.Module:
        """Wrap declarations in a module with its docstring and imports."""
        body: list[ast.stmt] = [
            nodes.docstring(
                f"Generated buildable declarations for {record.fully_qualified_name}. Do not edit."
            ),
            nodes.import_from("__future__", ["annotations"]),
            nodes.import_from("dataclasses", ["dataclass"]),
            nodes.import_from("typing", ["Any"]),
            nodes.import_from(names.RUNTIME_MODULE, _RUNTIME_IMPORTS),
        ]
        if record.module_path:
            body.append(
                nodes.import_from(record.module_path, [names.record_import_name(record)])
            )
        else:
            logger.warning(
                f"Record has no package qualifier; generated module cannot import it "
                f"(record={record.qualified_name})"
            )
        body.extend(declarations)
        module = ast.Module(body=body, type_ignores=[])
        return ast.fix_missing_locations(module)
