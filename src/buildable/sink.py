# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Output sinks receiving generated artifacts."""

import logging
from pathlib import Path
from typing import Protocol

from buildable.model import GeneratedArtifact

logger = logging.getLogger(__name__)


class SinkError(RuntimeError):
    """Represent a fatal failure to store a generated artifact."""


class ArtifactSink(Protocol):
    """Define the contract for receiving generated artifacts."""

    def write(self, artifact: GeneratedArtifact) -> None:
        """Store one generated artifact.

        Raises:
            SinkError: If the artifact cannot be stored.
        """


class InMemorySink:
    """Collect generated artifacts in memory."""

    def __init__(self) -> None:
        self.artifacts: list[GeneratedArtifact] = []

    def write(self, artifact: GeneratedArtifact) -> None:
        self.artifacts.append(artifact)


class FileSystemSink:
    """Write generated artifacts beneath a generated-sources root."""

    def __init__(self, output_root: Path) -> None:
        self._output_root = output_root
        self.written: list[Path] = []

    def write(self, artifact: GeneratedArtifact) -> None:
        """Write one artifact to ``output_root / artifact.target_file``.

        Args:
            artifact: Generated artifact.

        Raises:
            SinkError: If directories or the file cannot be written.
        """
        target = self._output_root / Path(artifact.target_file)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(artifact.source_text, encoding="utf-8")
        except OSError as exc:
            logger.warning(
                f"Failed to write generated artifact (target={target} error={exc})"
            )
            raise SinkError(f"Failed to write {target}: {exc}") from exc
        self.written.append(target)
        logger.info(f"Wrote generated artifact (record={artifact.record_name} target={target})")
