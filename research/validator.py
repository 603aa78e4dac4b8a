"""Move smart-contract validation via the generative backend.

The model reviews the contract and replies with a JSON report. When the
reply is unusable the caller still gets a complete report: overall status
``ERROR`` with a single CRITICAL issue describing the parse failure.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

from research.errors import ValidationError
from research.extraction import FallbackBuilder, extract_json
from research.llm import GenerativeBackend

if TYPE_CHECKING:
    from config.settings import Settings

logger = logging.getLogger(__name__)

_VALIDATION_PROMPT = """\
You are an expert Move language smart contract validator. Analyze this Move contract:

```move
{code}
```

Provide analysis in this JSON format:
{{
  "overallStatus": "PASSED|WARNING|FAILED",
  "summary": "Brief summary",
  "lineCount": number,
  "issues": [
    {{
      "type": "ERROR|WARNING|INFO",
      "severity": "CRITICAL|HIGH|MEDIUM|LOW",
      "line": number,
      "title": "Issue title",
      "description": "Description",
      "suggestion": "How to fix"
    }}
  ],
  "securityChecks": [
    {{"check": "Check name", "status": "PASSED|FAILED|WARNING", "description": "Description"}}
  ],
  "bestPractices": [
    {{"practice": "Practice name", "status": "FOLLOWED|NOT_FOLLOWED", "description": "Description"}}
  ],
  "gasOptimization": {{
    "status": "OPTIMIZED|NEEDS_IMPROVEMENT",
    "suggestions": ["Suggestion 1", "Suggestion 2"]
  }},
  "recommendations": ["Recommendation 1", "Recommendation 2"]
}}

Check for: syntax errors, security vulnerabilities, best practices, gas optimization.
"""


def count_lines(code: str) -> int:
    return len(code.split("\n"))


def validation_fallback(code: str) -> FallbackBuilder:
    """Return the builder for the report used when the reply has no parseable JSON."""

    def build(raw_text: str) -> dict[str, Any]:  # noqa: ARG001
        return {
            "overallStatus": "ERROR",
            "summary": "Failed to parse validation results",
            "lineCount": count_lines(code),
            "issues": [{
                "type": "ERROR",
                "severity": "CRITICAL",
                "line": 1,
                "title": "Parsing Error",
                "description": "Unable to parse the validator's response as JSON",
                "suggestion": "Please try again",
            }],
            "securityChecks": [],
            "bestPractices": [],
            "gasOptimization": {"status": "UNKNOWN", "suggestions": []},
            "recommendations": ["Try again or check code format"],
        }

    return build


class ContractValidator:
    """Reviews Move contracts with the generative backend."""

    def __init__(self, settings: Settings, backend: Optional[GenerativeBackend] = None) -> None:
        self.settings = settings
        self.backend = backend or GenerativeBackend(settings)

    def validate(self, move_code: Optional[str]) -> dict[str, Any]:
        """Validate *move_code* and return the report dict.

        Raises:
            ValidationError: If no code was supplied.
            SynthesisBackendError: If the generative backend call fails.
        """
        if not move_code or not move_code.strip():
            raise ValidationError("Move contract code is required")

        logger.info("Validating Move contract (%d lines)", count_lines(move_code))
        raw_text = self.backend.generate(_VALIDATION_PROMPT.format(code=move_code))
        return extract_json(raw_text, validation_fallback(move_code))
