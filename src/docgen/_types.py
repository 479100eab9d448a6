"""Shared type definitions for docgen."""

from typing import Literal

# Language tag taken from the first content directory level (e.g. "en")
type Language = str

# URL path with the language segment removed (e.g. "/guide/intro")
type CanonicalPath = str

# Kind of derived artifact written per language
type ArtifactKind = Literal["document", "combined", "ordered", "menu"]
