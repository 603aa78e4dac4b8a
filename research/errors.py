"""Exception hierarchy for the research pipeline.

Propagation rules:

- ``ValidationError`` is raised before any backend call and surfaces to the
  caller (HTTP 400).
- ``LiteratureBackendError`` is raised by the literature clients and always
  caught by the federated executor; it only shrinks that backend's results.
- ``SynthesisBackendError`` surfaces as a request-level failure (HTTP 500).
- ``SynthesisParseError`` never leaves ``research.extraction``.
"""

from __future__ import annotations


class ResearchError(Exception):
    """Base class for every error raised by the ``research`` package."""


class ValidationError(ResearchError):
    """Request input is missing or empty."""


class LiteratureBackendError(ResearchError):
    """A literature backend call failed or returned malformed data."""

    def __init__(self, backend: str, message: str) -> None:
        super().__init__(f"{backend}: {message}")
        self.backend = backend


class SynthesisBackendError(ResearchError):
    """The generative backend is unreachable, unconfigured or returned an error."""


class SynthesisParseError(ResearchError):
    """Generative backend output did not contain a parseable JSON object."""
