"""
Flask web server for Research Hub.

Routes
──────
POST /api/search             Digest + federated literature search (JSON)
GET  /api/search             Usage example
POST /api/validate-contract  Move contract validation report (JSON)
POST /api/vet-profile        Consultant profile vetting record (JSON)
GET  /api/llm-check          Generative backend connectivity check
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from pydantic import ValidationError as PydanticValidationError

# Allow running as `python web/app.py` from the project root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

load_dotenv()

from config.settings import Settings
from research.assembler import SEARCH_FAILED, assemble_error, error_status, to_payload
from research.errors import ValidationError
from research.llm import GenerativeBackend
from research.models import ConsultantProfile
from research.service import ResearchService
from research.synthesis import SynthesisEngine
from research.validator import ContractValidator
from research.vetting import ProfileVetter

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _error(error: str, details: Optional[str], status: int):
    return jsonify(to_payload(assemble_error(error, details))), status


def _json_object() -> dict[str, Any]:
    # Valid JSON that is not an object is treated like an empty body.
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _optional_str(body: dict[str, Any], key: str) -> Optional[str]:
    value = body.get(key)
    return value if isinstance(value, str) else None


def create_app(
    settings: Optional[Settings] = None,
    *,
    backend: Optional[GenerativeBackend] = None,
    service: Optional[ResearchService] = None,
    validator: Optional[ContractValidator] = None,
    vetter: Optional[ProfileVetter] = None,
) -> Flask:
    """Build the Flask app.

    Collaborators default to real implementations sharing one
    ``GenerativeBackend``; tests pass their own.
    """
    settings = settings or Settings()
    backend = backend or GenerativeBackend(settings)
    service = service or ResearchService(settings, engine=SynthesisEngine(settings, backend))
    validator = validator or ContractValidator(settings, backend)
    vetter = vetter or ProfileVetter(settings, backend)

    app = Flask(__name__)

    # ── Search ─────────────────────────────────────────────────────────────

    @app.route("/api/search", methods=["POST"])
    def search():
        """Run a full search.

        Body: ``{"query": "...", "category": "..."}`` (category optional).
        """
        body = _json_object()
        query = _optional_str(body, "query")
        category = _optional_str(body, "category")

        try:
            response = asyncio.run(service.search(query, category))
        except ValidationError as exc:
            return _error(str(exc), None, error_status(exc))
        except Exception as exc:
            logger.exception("Search failed for query=%r", query)
            return _error(SEARCH_FAILED, str(exc) or "Unknown error", error_status(exc))

        return jsonify(to_payload(response))

    @app.route("/api/search", methods=["GET"])
    def search_usage():
        return jsonify({
            "message": "Use POST method with query parameter to search",
            "example": {
                "method": "POST",
                "body": {"query": "DeFi protocols", "category": "Finance"},
            },
        })

    # ── Contract validation ────────────────────────────────────────────────

    @app.route("/api/validate-contract", methods=["POST"])
    def validate_contract():
        """Body: ``{"moveCode": "..."}``. Returns the validation report."""
        body = _json_object()
        try:
            report = validator.validate(_optional_str(body, "moveCode"))
        except ValidationError as exc:
            return _error(str(exc), None, 400)
        except Exception as exc:
            logger.exception("Move contract validation failed")
            return _error("Failed to validate Move contract", str(exc) or "Unknown error", 500)
        return jsonify(report)

    # ── Profile vetting ────────────────────────────────────────────────────

    @app.route("/api/vet-profile", methods=["POST"])
    def vet_profile():
        """Body: a consultant application (camelCase fields)."""
        body = request.get_json(silent=True) or {}
        try:
            profile = ConsultantProfile.model_validate(body)
            record = vetter.vet(profile)
        except PydanticValidationError as exc:
            return _error("Invalid consultant profile", str(exc), 400)
        except ValidationError as exc:
            return _error(str(exc), None, 400)
        except Exception as exc:
            logger.exception("Profile vetting failed")
            return _error("Failed to vet consultant profile", str(exc) or "Unknown error", 500)

        approved = bool(record.get("isApproved"))
        return jsonify({
            "success": True,
            "validation": record,
            "message": "Consultant profile approved" if approved else "Profile submitted for review",
        })

    # ── Backend check ──────────────────────────────────────────────────────

    @app.route("/api/llm-check")
    def llm_check():
        try:
            message = backend.ping()
        except Exception as exc:
            logger.exception("Generative backend check failed")
            return _error("Generative backend check failed", str(exc) or "Unknown error", 500)
        return jsonify({"success": True, "message": message})

    return app


settings = Settings()
app = create_app(settings)


# ── Entry point ────────────────────────────────────────────────────────────

if __name__ == "__main__":
    settings.validate()
    app.run(debug=settings.debug, host="0.0.0.0", port=settings.port)
