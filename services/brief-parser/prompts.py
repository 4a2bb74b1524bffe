"""Prompts for AI-backed advertising brief parsing."""

SYSTEM_PROMPT = (
    "You are an expert marketing strategist who specializes in parsing advertising "
    "briefs and extracting structured information. Always respond with valid JSON only."
)

_JSON_SUFFIX = """

CRITICAL OUTPUT RULES:
- Return ONLY a single valid JSON object. No other text before or after.
- Do NOT include any preamble, explanation, or markdown formatting.
- Do NOT wrap in code fences. Just raw JSON."""

BRIEF_PARSE_PROMPT = """Parse the following advertising brief and extract structured information. Be thorough and intelligent in your extraction.

Brief Text:
\"\"\"
{brief_text}
\"\"\"

Extract the following fields from the brief. If a field is not explicitly mentioned, make reasonable inferences based on context or leave it empty if no inference is possible:

1. goal: The main campaign objective or business goal
2. targetAudience: Who is the primary audience for this campaign
3. keyBenefits: List of product/service benefits or value propositions (as array)
4. brandPersonality: The brand's personality, voice, or positioning
5. productDetails: What product or service is being advertised
6. campaignRequirements: Specific campaign requirements, channels, or specifications
7. toneMood: The desired tone, mood, or emotional feeling for the campaign
8. callToAction: What action should the audience take
9. competitiveContext: Any mention of competitors or market positioning
10. constraints: Budget, timeline, or other constraints mentioned

Use EXACTLY this structure:
{{
  "goal": "string",
  "targetAudience": "string",
  "keyBenefits": ["string", "string"],
  "brandPersonality": "string",
  "productDetails": "string",
  "campaignRequirements": "string",
  "toneMood": "string",
  "callToAction": "string",
  "competitiveContext": "string",
  "constraints": "string"
}}""" + _JSON_SUFFIX


def build_parse_prompt(brief_text: str) -> str:
    return BRIEF_PARSE_PROMPT.format(brief_text=brief_text)
