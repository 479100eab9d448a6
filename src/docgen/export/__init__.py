"""JSON artifact persistence."""

from docgen.export.artifacts import ArtifactWriter, WrittenArtifact, dumps

__all__ = ["ArtifactWriter", "WrittenArtifact", "dumps"]
