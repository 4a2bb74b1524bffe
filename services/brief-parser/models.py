"""Pydantic models for the brief parsing API.

JSON payloads use camelCase keys to match the web frontend.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ParsedBrief(CamelModel):
    goal: str = ""
    target_audience: str = ""
    key_benefits: list[str] = []
    brand_personality: str = ""
    product_details: str = ""
    campaign_requirements: str = ""
    tone_mood: str = ""
    call_to_action: str = ""
    competitive_context: str = ""
    constraints: str = ""


class BriefParsingRequest(CamelModel):
    brief_text: str = ""
    file_name: str | None = None


class ParseMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    generated_at: str
    request_id: str
    source: Literal["openai_api", "enhanced_fallback_parsing", "basic_parsing"]
    model: str | None = None
    api_error: str | None = None
    file_name: str | None = Field(default=None, alias="fileName")


class BriefParsingResponse(CamelModel):
    success: bool = True
    parsed_brief: ParsedBrief
    metadata: ParseMetadata


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


class AIGenerated(BaseModel):
    """Brief parsed by the language model."""

    kind: Literal["aiGenerated"] = "aiGenerated"
    value: ParsedBrief
    model: str


class Fallback(BaseModel):
    """Brief parsed by the heuristic extractor.

    reason is "no_api_key" when AI parsing is not configured and
    "ai_error" when the AI call or its output failed.
    """

    kind: Literal["fallback"] = "fallback"
    value: ParsedBrief
    reason: Literal["no_api_key", "ai_error"]
    api_error: str | None = None


ParseOutcome = Annotated[Union[AIGenerated, Fallback], Field(discriminator="kind")]
