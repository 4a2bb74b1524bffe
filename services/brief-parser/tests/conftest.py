"""Shared test fixtures for brief parser tests."""

import json
import sys
from pathlib import Path

import pytest

# Add parent directory to path so we can import the modules
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def labelled_brief() -> str:
    """A brief written with explicit "Label: value" lines."""
    return (
        "Campaign Brief - Spring Launch\n"
        "\n"
        "Goal: Increase signups for the meal kit subscription\n"
        "Target Audience: Busy parents aged 30-45 in urban areas\n"
        "Product: Weekly meal kit with 15-minute recipes\n"
        "Tone: Warm, playful and reassuring\n"
        "Call to action: Start your free trial today\n"
        "Competitors: HelloFresh and Blue Apron dominate the market\n"
        "Constraints: Budget of $50k, launch by March 1\n"
        "\n"
        "Key Benefits:\n"
        "- Saves time on weeknights\n"
        "- Reduces food waste\n"
        "- Improves family nutrition\n"
    )


@pytest.fixture
def unstructured_brief() -> str:
    """A brief with no labels at all."""
    return "Just a random sentence with no structure."


@pytest.fixture
def mock_ai_brief() -> dict:
    """Parsed brief as the language model returns it."""
    return {
        "goal": "Increase signups",
        "targetAudience": "Busy parents",
        "keyBenefits": ["Saves time", "Reduces waste"],
        "brandPersonality": "Friendly",
        "productDetails": "Meal kit",
        "campaignRequirements": "Instagram and TikTok",
        "toneMood": "Playful",
        "callToAction": "Start your free trial",
        "competitiveContext": "HelloFresh",
        "constraints": "$50k budget",
    }


@pytest.fixture
def mock_ai_response(mock_ai_brief: dict) -> str:
    """Raw completion text containing the parsed brief JSON."""
    return json.dumps(mock_ai_brief)


@pytest.fixture
def mock_markdown_response(mock_ai_brief: dict) -> str:
    """Completion text wrapped in a markdown code fence."""
    return "```json\n" + json.dumps(mock_ai_brief) + "\n```"


@pytest.fixture
def mock_preamble_response(mock_ai_brief: dict) -> str:
    """Completion text with prose before the JSON."""
    return "Here is the parsed brief:\n\n" + json.dumps(mock_ai_brief)
