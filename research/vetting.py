"""Consultant profile vetting via the generative backend.

Produces a vetting record only; storing consultants is someone else's job.
An unusable model reply yields a provisional approval pending manual
verification rather than a rejection.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

from research.errors import ValidationError
from research.extraction import FallbackBuilder, extract_json
from research.llm import GenerativeBackend
from research.models import ConsultantProfile

if TYPE_CHECKING:
    from config.settings import Settings

logger = logging.getLogger(__name__)

_VETTING_PROMPT = """\
You are a Web3 consultant validation expert. Please analyze the following consultant application and provide validation results.

Consultant Details:
- Name: {full_name}
- Email: {email}
- Expertise: {expertise}
- Experience: {experience}
- Hourly Rate: {hourly_rate}
- Location: {location}
- Languages: {languages}
- Specialties: {specialties}
- Description: {description}
- LinkedIn: {linkedin_url}
- GitHub: {github_url}
- Portfolio: {portfolio_url}

Please provide your analysis in the following JSON format:
{{
  "isApproved": boolean,
  "confidence": "HIGH|MEDIUM|LOW",
  "rating": number (1-5),
  "verificationStatus": "VERIFIED|PENDING|REJECTED",
  "expertiseLevel": "BEGINNER|INTERMEDIATE|EXPERT",
  "recommendations": ["Recommendation 1", "Recommendation 2"],
  "validationNotes": "Detailed validation notes",
  "suggestedSpecialties": ["Specialty 1", "Specialty 2"],
  "profileEnhancement": "Suggestions for profile improvement"
}}

Focus on:
1. Web3 expertise validation
2. Experience level assessment
3. Profile completeness
4. Professional credibility
5. Rate appropriateness
6. Specialization relevance

Be thorough in your analysis and provide specific feedback for improvement.
"""


def build_vetting_prompt(profile: ConsultantProfile) -> str:
    def shown(value: object, missing: str = "Not provided") -> str:
        return str(value) if value else missing

    return _VETTING_PROMPT.format(
        full_name=profile.full_name,
        email=profile.email,
        expertise=profile.expertise,
        experience=profile.experience,
        hourly_rate=profile.hourly_rate,
        location=profile.location,
        languages=", ".join(profile.languages) or "Not specified",
        specialties=", ".join(profile.specialties) or "Not specified",
        description=shown(profile.description),
        linkedin_url=shown(profile.linkedin_url),
        github_url=shown(profile.github_url),
        portfolio_url=shown(profile.portfolio_url),
    )


def vetting_fallback(profile: ConsultantProfile) -> FallbackBuilder:
    """Return the builder for the provisional record used when the reply is unusable."""

    def build(raw_text: str) -> dict[str, Any]:  # noqa: ARG001
        return {
            "isApproved": True,
            "confidence": "MEDIUM",
            "rating": 4.0,
            "verificationStatus": "PENDING",
            "expertiseLevel": "INTERMEDIATE",
            "recommendations": ["Complete your profile with more details"],
            "validationNotes": "Profile submitted successfully",
            "suggestedSpecialties": list(profile.specialties),
            "profileEnhancement": "Add more details about your Web3 experience",
        }

    return build


class ProfileVetter:
    """Vets consultant applications with the generative backend."""

    def __init__(self, settings: Settings, backend: Optional[GenerativeBackend] = None) -> None:
        self.settings = settings
        self.backend = backend or GenerativeBackend(settings)

    def vet(self, profile: ConsultantProfile) -> dict[str, Any]:
        """Vet *profile* and return the vetting record.

        Raises:
            ValidationError: If any required profile field is blank.
            SynthesisBackendError: If the generative backend call fails.
        """
        missing = profile.missing_fields()
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        logger.info("Vetting consultant profile email=%s", profile.email)
        raw_text = self.backend.generate(build_vetting_prompt(profile))
        return extract_json(raw_text, vetting_fallback(profile))
