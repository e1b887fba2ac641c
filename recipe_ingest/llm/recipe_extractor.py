"""
Recipe Extractor
================

AI collaborator: turns cleaned page text into a recipe, or proposes an
improved version of an existing recipe for review.

The model answers in JSON mode; the parsed object goes straight through
the normalizer, so whatever field names the model picks are reconciled there.
"""

import json
import logging
import re
from typing import Any, Dict, Optional

from openai import AsyncOpenAI

from ..core.config import get_settings
from ..core.exceptions import ExtractionError
from ..data.normalizer import normalize
from ..data.persistence import sanitize_for_ai
from ..schemas.canonical import Recipe

logger = logging.getLogger(__name__)


EXTRACTION_SYSTEM_PROMPT = """You extract recipes from web pages and cookbook text.

Return ONLY a JSON object with these fields:
{
  "title": "string",
  "subtitle": "string|null",
  "introduction": "string|null",
  "description": "string",
  "ingredients": [
    {"amount": number|null, "unit": "string|null", "name": "string",
     "group_name": "string|null", "notes": "string|null"}
  ],
  "instructions": [{"step_number": 1, "description": "string", "extra": null}],
  "tools": [{"name": "string", "notes": "string|null"}],
  "servings": number|null,
  "prep_time": "string|null",
  "cook_time": "string|null",
  "total_time": "string|null",
  "difficulty": "string|null",
  "cuisine": "string|null",
  "author": "string|null",
  "source_language": "ISO 639-1 code of the source text",
  "ai_tags": ["string"]
}

Rules:
- Keep ingredient groups ("For the sauce") in group_name, in page order
- Durations are short readable text ("30 min", "1 uur 30 min")
- Never invent ingredients or steps that are not in the source
"""

REVIEW_SYSTEM_PROMPT = """You review a stored recipe against its source text.

Correct factual mistakes, fill in missing fields and split ingredient lines
into amount, unit and name. Return the complete improved recipe as a JSON
object with the same fields as the input recipe. Do not drop information.
"""

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class RecipeExtractor:
    """Recipe extraction backed by OpenAI chat completions (JSON mode)."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Optional[Any] = None,
    ):
        settings = get_settings()

        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.model = model or settings.openai_model
        self.temperature = settings.llm_temperature
        self.max_tokens = settings.llm_max_tokens
        self.client = client or (AsyncOpenAI(api_key=self.api_key) if self.api_key else None)

    async def extract_from_text(self, content: str) -> Recipe:
        """
        Extract a recipe from cleaned page text.

        Raises:
            ExtractionError: no API key, failed call, or non-object response
        """
        data = await self._complete(EXTRACTION_SYSTEM_PROMPT, content)
        recipe = normalize(data)
        logger.info(
            "AI extracted %r (%d ingredients, %d steps)",
            recipe.title,
            len(recipe.ingredients),
            len(recipe.instructions),
        )
        return recipe

    async def review_recipe(self, recipe: Dict[str, Any], source_text: str) -> Recipe:
        """Propose an improved recipe; the caller diffs it against the original."""
        payload = json.dumps(
            {"recipe": sanitize_for_ai(recipe), "source": source_text or "No source data."},
            ensure_ascii=False,
            default=str,
        )
        data = await self._complete(REVIEW_SYSTEM_PROMPT, payload)
        return normalize(data)

    async def _complete(self, system_prompt: str, user_content: str) -> Dict[str, Any]:
        if self.client is None:
            raise ExtractionError("AI extraction unavailable", detail="OpenAI API key not configured")

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_content},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as exc:
            logger.error("AI extraction call failed: %s", exc)
            raise ExtractionError("AI extraction failed", detail=str(exc)) from exc

        content = response.choices[0].message.content or ""
        return self._parse(content)

    @staticmethod
    def _parse(content: str) -> Dict[str, Any]:
        text = _FENCE_RE.sub("", content.strip())
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning("AI returned invalid JSON: %s", exc)
            raise ExtractionError("AI returned invalid JSON", detail=str(exc)) from exc

        # Some models wrap the object: {"recipe": {...}}
        if isinstance(data, dict) and isinstance(data.get("recipe"), dict) and len(data) == 1:
            data = data["recipe"]
        if not isinstance(data, dict):
            raise ExtractionError("AI response is not a JSON object")
        return data
