"""
AI-assisted story parsing.

Turns a free-form narrative into a draft STAR story. Providers are tried in
order and the first one that answers wins. The model is told never to invent
details; sections it cannot find come back as None and lower the confidence.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Optional

from starcoach.contexts.catalog import LP_IDS, is_valid_lp
from starcoach.contexts.coaching.exceptions import StoryParsingError
from starcoach.contexts.coaching.logger import _log_error, _log_info, _log_success, _log_warning
from starcoach.contexts.stories.story_data_structure import LPRole, Story
from starcoach.utils.llm import LLMProvider, coerce_string_list, get_provider, parse_json_object

MIN_STORY_CHARS = 50
PARSER_MAX_TOKENS = 4096
PARSER_TEMPERATURE = 0.3

DEFAULT_PARSER_PROVIDERS = "openai,anthropic"
CONFIDENCE_LEVELS = ("high", "medium", "low")

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

_SYSTEM_PROMPT = """\
You are an expert at analyzing behavioral interview stories and structuring them into \
STAR format (Situation, Task, Action, Result).

Convert the raw story into well-organized STAR format with supporting metadata.
If the input is not a professional scenario or is too thin to structure, return:
{{"error": "Invalid input", "reason": "<explanation>"}}

Situation (~20-40 words): context with scale, stakes and timeline. Keep concrete numbers.
Task (~15-30 words): the candidate's specific responsibility ("I was responsible for...").
Action (~100-200 words): specific steps the candidate took, in "I" statements. When \
describing collaboration, state the candidate's role ("I coordinated with...").
Result (~40-80 words): quantified outcomes first, then learnings or follow-up.

Title: 3-6 word summary of the core challenge or achievement.
Metrics: quantifiable data as stated. For implied metrics (e.g., "doubled") include both \
forms: ["doubled revenue", "100% increase"]. Empty list if none.
Suggested LPs: 2-3 Leadership Principle ids.
Valid LP IDs: {lp_ids}

Confidence:
- "high": all STAR components present with specific metrics and a clear narrative
- "medium": components present but metrics vague or one component weak
- "low": major components missing or significant ambiguity

If a component is unclear or absent, set it to null. Never fabricate details.

Return a single JSON object with no markdown fences or additional text:
{{
  "title": "string",
  "situation": "string or null",
  "task": "string or null",
  "action": "string or null",
  "result": "string or null",
  "metrics": ["string"],
  "suggestedLPs": ["LP_ID"],
  "confidence": "high" | "medium" | "low"
}}"""

_USER_PROMPT_TEMPLATE = """\
Please break down this raw story into STAR format:

{raw_text}

Remember to:
- Use "I" statements in the action section
- Extract specific metrics and numbers
- Keep the situation concise but impactful
- Focus on what the candidate personally did, not the team"""


@dataclass
class ParsedStory:
    """
    Draft STAR story extracted from free text.

    Sections the model could not identify are None (never guessed).

    Attributes:
        title: Short summary of the story
        situation, task, action, result: STAR sections or None
        metrics: Quantified statements found in the text
        suggested_lps: Catalog LP ids the story seems to demonstrate
        confidence: "high" | "medium" | "low"
        provider: Provider that produced the parse
    """

    title: str = ""
    situation: Optional[str] = None
    task: Optional[str] = None
    action: Optional[str] = None
    result: Optional[str] = None
    metrics: list[str] = field(default_factory=list)
    suggested_lps: list[str] = field(default_factory=list)
    confidence: str = "low"
    provider: Optional[str] = None

    @classmethod
    def from_response(cls, data: dict[str, Any], provider: Optional[str] = None) -> "ParsedStory":
        """Build from a parsed model reply, dropping unknown LP ids."""
        suggested = []
        for lp_id in coerce_string_list(data.get("suggestedLPs")):
            if is_valid_lp(lp_id):
                if lp_id not in suggested:
                    suggested.append(lp_id)
            else:
                _log_warning(f"Dropping unknown suggested LP: {lp_id}")

        confidence = str(data.get("confidence") or "").strip().lower()
        if confidence not in CONFIDENCE_LEVELS:
            confidence = "low"

        return cls(
            title=str(data.get("title") or "").strip(),
            situation=_optional_section(data.get("situation")),
            task=_optional_section(data.get("task")),
            action=_optional_section(data.get("action")),
            result=_optional_section(data.get("result")),
            metrics=coerce_string_list(data.get("metrics")),
            suggested_lps=suggested,
            confidence=confidence,
            provider=provider,
        )

    @property
    def missing_sections(self) -> list[str]:
        return [
            name
            for name in ("situation", "task", "action", "result")
            if getattr(self, name) is None
        ]

    def to_story(self, story_id: Optional[str] = None) -> Story:
        """Create a Story with the suggested LPs as primary LPs."""
        story = Story.new(story_id)
        story.title = self.title
        story.situation = self.situation or ""
        story.task = self.task or ""
        story.action = self.action or ""
        story.result = self.result or ""
        story.metrics = list(self.metrics)
        story.lp_roles = {lp_id: LPRole.PRIMARY for lp_id in self.suggested_lps}
        return story


def parse_story_text(
    raw_text: str,
    providers: Optional[list[LLMProvider]] = None,
) -> ParsedStory:
    """
    Decompose a free-form narrative into a STAR draft.

    Args:
        raw_text: The candidate's story as written
        providers: Providers to try in order (default: built from STORY_PARSER_PROVIDERS)

    Returns:
        ParsedStory

    Raises:
        StoryParsingError: If the text is too short, no provider answers, the
            reply is not JSON, or the model rejects the input
    """
    raw_text = (raw_text or "").strip()
    if len(raw_text) < MIN_STORY_CHARS:
        raise StoryParsingError(
            f"Please provide a more detailed story (at least {MIN_STORY_CHARS} characters)"
        )

    if providers is None:
        providers = _configured_providers()
    if not providers:
        raise StoryParsingError("No AI provider configured")

    system_prompt = _SYSTEM_PROMPT.format(lp_ids=", ".join(LP_IDS))
    user_prompt = _USER_PROMPT_TEMPLATE.format(raw_text=raw_text)

    content = None
    used_provider = None
    for provider in providers:
        _log_info(f"Attempting parse with {provider.name}")
        try:
            response = provider.generate(
                system_prompt=system_prompt,
                user_prompt=user_prompt,
                max_tokens=PARSER_MAX_TOKENS,
                temperature=PARSER_TEMPERATURE,
            )
        except Exception as e:  # fall through to the next provider
            _log_warning(f"{provider.name} failed: {e}")
            continue
        if response.content and response.content.strip():
            content = response.content
            used_provider = provider.name
            break
        _log_warning(f"{provider.name} returned an empty response")

    if content is None:
        _log_error("No response from any AI provider")
        raise StoryParsingError("No response from any AI provider")

    data = parse_json_object(content)
    if data is None:
        _log_error(f"Failed to parse response from {used_provider}")
        raise StoryParsingError("Failed to parse AI response")

    if data.get("error"):
        reason = data.get("reason")
        _log_warning(f"Model rejected story: {data['error']} ({reason})")
        raise StoryParsingError(str(data["error"]), reason=str(reason) if reason else None)

    parsed = ParsedStory.from_response(data, provider=used_provider)
    _log_success(
        f"Parsed story '{parsed.title}' with {used_provider} (confidence: {parsed.confidence})"
    )
    return parsed


def _configured_providers() -> list[LLMProvider]:
    """Instantiate providers named in STORY_PARSER_PROVIDERS, skipping unavailable ones."""
    names = os.getenv("STORY_PARSER_PROVIDERS", DEFAULT_PARSER_PROVIDERS)
    providers = []
    for name in names.split(","):
        name = name.strip()
        if not name:
            continue
        try:
            providers.append(get_provider(provider_name=name))
        except (ImportError, ValueError) as e:
            _log_warning(f"Skipping provider {name}: {e}")
    return providers


def _optional_section(value) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
