"""Gemini calls: photo quality gate, styling analysis and outfit rendering."""

import asyncio
import base64
import json
import logging

from google.genai import types
from pydantic import ValidationError

from atelier.config import (
    ANALYSIS_MODEL,
    ANALYSIS_RESIZE,
    ANALYSIS_TEMPERATURE,
    EDIT_RESIZE,
    IMAGE_MODEL,
    QUALITY_CHECK_RESIZE,
)
from atelier.errors import GenerationError, ResponseParseError, raise_user_facing
from atelier.gemini import get_client
from atelier.imaging import decode_base64, resize_base64_image, to_data_uri
from atelier.models import AnalysisResult, ImageQualityResult, UserMetrics, UserPreferences
from atelier.prompts import QUALITY_PROMPT, build_analysis_prompt, build_edit_prompt
from atelier.retry import retry_with_backoff

logger = logging.getLogger(__name__)

OPTIMISTIC_QUALITY = {
    "isValid": True,
    "score": 100,
    "issues": [],
    "advice": "",
    "details": {"lighting": "Good", "focus": "Sharp", "framing": "Good"},
}


def _extract_json(text: str | None) -> dict:
    """Strip markdown code fences if present, then parse JSON."""
    if not text:
        raise ResponseParseError("Empty response body")
    text = text.strip()
    if text.startswith("```"):
        text = text.removeprefix("```json").removeprefix("```")
        text = text.removesuffix("```")
    try:
        return json.loads(text.strip())
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Response is not valid JSON: {e.msg}") from e


def _image_part(payload: str) -> types.Part:
    return types.Part.from_bytes(data=decode_base64(payload), mime_type="image/jpeg")


async def _generate(model: str, contents: list, config: types.GenerateContentConfig | None = None):
    client = get_client()
    return await retry_with_backoff(
        lambda: asyncio.to_thread(
            client.models.generate_content,
            model=model,
            contents=contents,
            config=config,
        )
    )


def _first_inline_image(response) -> str | None:
    """Return the first inline image of the first candidate as a data URI."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates or candidates[0].content is None:
        return None

    for part in candidates[0].content.parts or []:
        inline = part.inline_data
        if inline is None or not inline.data:
            continue
        data = inline.data
        if isinstance(data, bytes):
            data = base64.b64encode(data).decode("ascii")
        return to_data_uri(data, inline.mime_type or "image/png")
    return None


async def validate_image_quality(image: str) -> ImageQualityResult:
    """Ask Gemini whether the photo is usable. Falls back to a pass on any error."""
    try:
        resized = await resize_base64_image(image, *QUALITY_CHECK_RESIZE)
        response = await _generate(
            ANALYSIS_MODEL,
            [_image_part(resized), QUALITY_PROMPT],
            types.GenerateContentConfig(response_mime_type="application/json"),
        )
        return ImageQualityResult.model_validate(_extract_json(response.text))
    except Exception as e:
        logger.warning("Quality check fallback: %s", e)
        return ImageQualityResult.model_validate(OPTIMISTIC_QUALITY)


async def analyze_image(
    image: str,
    metrics: UserMetrics | None = None,
    preferences: UserPreferences | None = None,
) -> AnalysisResult:
    """Run the full styling analysis for a portrait."""
    try:
        resized = await resize_base64_image(image, *ANALYSIS_RESIZE)
        prompt = build_analysis_prompt(metrics, preferences)
        response = await _generate(
            ANALYSIS_MODEL,
            [_image_part(resized), prompt],
            types.GenerateContentConfig(
                response_mime_type="application/json",
                temperature=ANALYSIS_TEMPERATURE,
            ),
        )
        parsed = _extract_json(response.text)
        try:
            return AnalysisResult.model_validate(parsed)
        except ValidationError as e:
            raise ResponseParseError(f"Analysis response has {e.error_count()} schema errors") from e
    except Exception as e:
        raise_user_facing(e)


analyze_image_with_gemini = analyze_image


async def generate_visual_edit(
    image: str,
    item_description: str,
    modification: str,
    styling_hint: str | None = None,
    constraints: dict[str, str] | None = None,
    refinement: str | None = None,
) -> str:
    """
    Render an edit of the user's photo and return it as a data URI.

    Modes:
        - Look: modification describes the outfit to put on
        - Refinement: same, plus a user instruction applied as an override
    """
    try:
        resized = await resize_base64_image(image, *EDIT_RESIZE)
        prompt = build_edit_prompt(item_description, modification, styling_hint, constraints, refinement)
        response = await _generate(IMAGE_MODEL, [_image_part(resized), prompt])

        generated = _first_inline_image(response)
        if generated is None:
            raise GenerationError("Falha na geração da imagem.")
        return generated
    except Exception as e:
        raise_user_facing(e)
