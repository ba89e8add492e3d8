"""Analysis collaborators

The video intelligence stage does not look at pixels itself. It asks a hosted
endpoint for cut recommendations and normalizes whatever comes back. Two
backends are provided:

- ``EdgeFunctionAnalysisClient`` posts to the hosted ``ai-video-process``
  function and returns the ``result`` object of its response.
- ``OpenAIAnalysisClient`` asks a chat model for the same JSON shape from the
  transcript, for environments without the hosted function.
"""

from __future__ import annotations

import asyncio
import json
import os
from typing import Any, Dict, Optional, Protocol

import aiohttp

from ..llm.openai_client import choose_model, get_openai_client
from ..utils.logger import LoggerMixin


class AnalysisClient(Protocol):
    """Anything that can turn a media reference into a raw analysis payload"""

    async def analyze(self, playback_url: str, transcript: str = "") -> Dict[str, Any]:
        ...


class EdgeFunctionAnalysisClient(LoggerMixin):
    """Calls the hosted video analysis function over HTTP"""

    def __init__(self, function_url: str, api_key: Optional[str] = None,
                 action: str = "ai_enhance", timeout_seconds: Optional[float] = None):
        if not function_url:
            raise ValueError("function_url is required for the edge function backend")
        self.function_url = function_url
        self.api_key = api_key
        self.action = action
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    def build_payload(self, playback_url: str, transcript: str = "") -> Dict[str, Any]:
        return {
            "action": self.action,
            "fileUrl": playback_url,
            "transcript": transcript or "",
        }

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
            headers["apikey"] = self.api_key
        return headers

    async def analyze(self, playback_url: str, transcript: str = "") -> Dict[str, Any]:
        payload = self.build_payload(playback_url, transcript)
        self.logger.info(f"Requesting video analysis for {playback_url}")

        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            async with session.post(self.function_url, json=payload, headers=self._headers()) as response:
                response.raise_for_status()
                data = await response.json(content_type=None)

        if not isinstance(data, dict):
            raise ValueError(f"Unexpected analysis response type: {type(data).__name__}")
        return data.get("result") or {}


ANALYSIS_SYSTEM_PROMPT = (
    "You are a video editor for a vehicle wrap shop. Given a video reference and its "
    "transcript, recommend cuts for a short-form social video.\n"
    "Return ONLY a single JSON object with these keys:\n"
    '{\n'
    '  "cuts": [{"start": 0, "end": 0, "score": 0.0, "description": "string"}],\n'
    '  "summary": "string",\n'
    '  "recommendations": ["string"],\n'
    '  "color_grading": "string",\n'
    '  "transitions": ["string"],\n'
    '  "text_overlays": ["string"],\n'
    '  "speed_ramps": ["string"]\n'
    '}\n'
    "Scores are between 0 and 1. Describe each cut with words like hook, reveal, detail, "
    "before, after, talking, squeegee, heat gun, cleaning.\n"
    "Output: JSON only. No markdown."
)


class OpenAIAnalysisClient(LoggerMixin):
    """Chat-model backed analysis for when the hosted function is unavailable"""

    def __init__(self, client=None, model_name: Optional[str] = None,
                 temperature: float = 0.3, max_tokens: int = 2000):
        self.client = client or get_openai_client()
        self.model_name = model_name or choose_model("analysis")
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def analyze(self, playback_url: str, transcript: str = "") -> Dict[str, Any]:
        user_prompt = json.dumps({
            "video_url": playback_url,
            "transcript": transcript or "",
        }, ensure_ascii=False)
        self.logger.info(f"Requesting cut recommendations from {self.model_name}")

        response = await asyncio.to_thread(
            self.client.chat.completions.create,
            model=self.model_name,
            messages=[
                {"role": "system", "content": ANALYSIS_SYSTEM_PROMPT},
                {"role": "user", "content": user_prompt},
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        return extract_json(response.choices[0].message.content or "")


def extract_json(text: str) -> Dict[str, Any]:
    """Return the first JSON object embedded in ``text``.

    Tolerates markdown fences and prose around the object.
    """
    text = text.strip()
    if text.startswith("```"):
        text = text.strip("`")
        if text.lower().startswith("json"):
            text = text[4:]
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        raise ValueError("No JSON object found in model response")
    data = json.loads(text[start:end + 1])
    if not isinstance(data, dict):
        raise ValueError("Model response JSON is not an object")
    return data


def build_analysis_client(config) -> AnalysisClient:
    """Create the analysis collaborator selected by ``config.analysis.backend``"""
    settings = config.analysis
    if settings.backend == "edge_function":
        return EdgeFunctionAnalysisClient(
            function_url=settings.function_url or os.getenv("EDITOR_BRAIN_ANALYSIS_URL", ""),
            api_key=os.getenv(settings.api_key_env),
            action=settings.action,
            timeout_seconds=settings.timeout_seconds,
        )
    if settings.backend == "openai":
        return OpenAIAnalysisClient(
            model_name=choose_model("analysis", config.llm.model_name),
            temperature=config.llm.temperature,
            max_tokens=config.llm.max_tokens,
        )
    raise ValueError(f"Unknown analysis backend: {settings.backend}")
