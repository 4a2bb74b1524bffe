"""Brief parsing orchestrator — AI parse with heuristic fallback.

Tries the OpenAI-backed parser first and falls back to the local field
extractor when no API key is configured, the call fails, or the model
output cannot be read as JSON.
"""

import json
import logging
import re
import uuid
from datetime import datetime, timezone

from field_extractor import extract_brief
from models import (
    AIGenerated,
    BriefParsingResponse,
    Fallback,
    ParsedBrief,
    ParseMetadata,
    ParseOutcome,
)
from openai_client import OpenAIClient, OpenAIServiceError, OpenAIServiceUnavailable
from prompts import SYSTEM_PROMPT, build_parse_prompt

logger = logging.getLogger(__name__)

GOAL_PLACEHOLDER = "Goal extraction failed - please fill manually"
AUDIENCE_PLACEHOLDER = "Audience extraction failed - please fill manually"

# camelCase key in the model output -> ParsedBrief attribute
SCALAR_KEYS: dict[str, str] = {
    "goal": "goal",
    "targetAudience": "target_audience",
    "brandPersonality": "brand_personality",
    "productDetails": "product_details",
    "campaignRequirements": "campaign_requirements",
    "toneMood": "tone_mood",
    "callToAction": "call_to_action",
    "competitiveContext": "competitive_context",
    "constraints": "constraints",
}


def parse_brief_text(brief_text: str, client: OpenAIClient | None) -> ParseOutcome:
    """Parse a brief, tagging the result with where it came from."""
    if client is None:
        logger.info("No OpenAI API key configured, using heuristic parsing")
        return Fallback(
            value=apply_placeholders(extract_brief(brief_text)),
            reason="no_api_key",
        )

    try:
        raw = client.complete(SYSTEM_PROMPT, build_parse_prompt(brief_text))
    except (OpenAIServiceUnavailable, OpenAIServiceError) as e:
        logger.error("OpenAI brief parsing failed: %s", e)
        return _fallback_after_error(brief_text, str(e))

    parsed = try_parse_json(raw)
    if parsed is None:
        return _fallback_after_error(brief_text, "Invalid JSON response from OpenAI")

    return AIGenerated(value=format_ai_brief(parsed), model=client.model)


def _fallback_after_error(brief_text: str, api_error: str) -> Fallback:
    return Fallback(
        value=apply_placeholders(extract_brief(brief_text)),
        reason="ai_error",
        api_error=api_error,
    )


def apply_placeholders(brief: ParsedBrief) -> ParsedBrief:
    """Fill the fields required downstream with a prompt to complete them manually."""
    updates = {}
    if not brief.goal:
        updates["goal"] = GOAL_PLACEHOLDER
    if not brief.target_audience:
        updates["target_audience"] = AUDIENCE_PLACEHOLDER
    return brief.model_copy(update=updates) if updates else brief


def format_ai_brief(parsed: dict) -> ParsedBrief:
    """Reshape the model's JSON into a ParsedBrief, dropping values of the wrong type."""
    fields = {}
    for key, attr in SCALAR_KEYS.items():
        value = parsed.get(key)
        fields[attr] = value.strip() if isinstance(value, str) else ""

    benefits = parsed.get("keyBenefits")
    if isinstance(benefits, list):
        fields["key_benefits"] = [b.strip() for b in benefits if isinstance(b, str) and b.strip()]

    return ParsedBrief(**fields)


def try_parse_json(raw: str) -> dict | None:
    """Try to extract a JSON object from the model output.

    Handles: direct JSON, markdown fences, and preamble text.
    """
    if not raw:
        return None

    cleaned = raw.strip()

    try:
        result = json.loads(cleaned)
        if isinstance(result, dict):
            return result
    except json.JSONDecodeError:
        pass

    match = re.search(r"```(?:json)?\s*\n?(.*?)\n?```", cleaned, re.DOTALL)
    if match:
        try:
            result = json.loads(match.group(1).strip())
            if isinstance(result, dict):
                return result
        except json.JSONDecodeError:
            pass

    # Outermost { ... } span
    start, end = cleaned.find("{"), cleaned.rfind("}")
    if start != -1 and end > start:
        try:
            result = json.loads(cleaned[start:end + 1])
            if isinstance(result, dict):
                return result
        except json.JSONDecodeError:
            pass

    logger.warning("Could not parse JSON from model response (%d chars)", len(cleaned))
    return None


def build_response(outcome: ParseOutcome, file_name: str | None = None) -> BriefParsingResponse:
    """Wrap a parse outcome in the API response envelope."""
    if isinstance(outcome, AIGenerated):
        source, model, api_error = "openai_api", outcome.model, None
    elif outcome.reason == "no_api_key":
        source, model, api_error = "basic_parsing", None, None
    else:
        source, model, api_error = "enhanced_fallback_parsing", None, outcome.api_error

    return BriefParsingResponse(
        parsed_brief=outcome.value,
        metadata=ParseMetadata(
            generated_at=datetime.now(timezone.utc).isoformat(),
            request_id=uuid.uuid4().hex[:12],
            source=source,
            model=model,
            api_error=api_error,
            file_name=file_name,
        ),
    )
