"""
Purpose:
- Send one prompt + image to a hosted, OpenAI-compatible chat-completions endpoint.
- The image travels inline as an image_url part carrying the photoDataUri.
- The model is asked for a JSON object; we hand the parsed dict back to the flow.

Notes:
- Requires: settings.model_api_key (or OPENAI_API_KEY in env).
- One request per call: no retries, no streaming.
"""

from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional
import httpx

from ..core.settings import settings
from .errors import ModelServiceError
from .prompts import PromptDefinition

logger = logging.getLogger(__name__)

_CLIENT_SINGLETON = None  # cached instance

@dataclass
class ModelConfig:
    api_base: str
    api_key: Optional[str]
    model: str
    max_tokens: int
    temperature: float
    timeout_s: float

def _excerpt(text: str, n: int = 300) -> str:
    text = (text or "").strip()
    return text if len(text) <= n else text[: n - 1] + "…"

class ModelClient:
    def __init__(self, cfg: ModelConfig, transport: httpx.BaseTransport | None = None):
        self.cfg = cfg
        self._http = httpx.Client(
            base_url=cfg.api_base.rstrip("/"),
            timeout=cfg.timeout_s,
            transport=transport,
        )

    def _payload(self, prompt: PromptDefinition, photo_data_uri: str, params: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "model": self.cfg.model,
            "messages": [
                {"role": "system", "content": prompt.system},
                {"role": "user", "content": [
                    {"type": "text", "text": prompt.render(**params)},
                    {"type": "image_url", "image_url": {"url": photo_data_uri}},
                ]},
            ],
            "max_tokens": self.cfg.max_tokens,
            "temperature": self.cfg.temperature,
            "response_format": {"type": "json_object"},
        }

    def run_prompt(self, prompt: PromptDefinition, photo_data_uri: str, **params) -> Dict[str, Any]:
        """
        Run `prompt` against the hosted model and return its JSON answer as a dict.
        Raises ModelServiceError on any transport, HTTP, or output-format problem.
        """
        if not self.cfg.api_key:
            raise ModelServiceError("model service credentials are not configured (MODEL_API_KEY)")

        headers = {"Authorization": f"Bearer {self.cfg.api_key}"}
        try:
            r = self._http.post("/chat/completions", json=self._payload(prompt, photo_data_uri, params), headers=headers)
            r.raise_for_status()
            data = r.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"{prompt.name}: model service returned {e.response.status_code}")
            raise ModelServiceError(
                f"model service returned {e.response.status_code}: {_excerpt(e.response.text)}"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"{prompt.name}: model service unreachable: {e!r}")
            raise ModelServiceError(f"model service unreachable: {e}") from e
        except ValueError as e:
            raise ModelServiceError("model service returned a non-JSON response") from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ModelServiceError("model service response has no message content") from e

        try:
            out = json.loads(content or "")
        except ValueError as e:
            raise ModelServiceError(f"model output is not JSON: {_excerpt(content or '', 120)}") from e
        if not isinstance(out, dict):
            raise ModelServiceError("model output is not a JSON object")

        usage = data.get("usage") or {}
        logger.info(f"{prompt.name}: ok (total_tokens={usage.get('total_tokens', '?')})")
        return out

    def close(self) -> None:
        self._http.close()

def get_model_client() -> ModelClient:
    """
    Return a cached client configured from settings.
    Also the FastAPI dependency for the flow routes (override it in tests).
    """
    global _CLIENT_SINGLETON
    if _CLIENT_SINGLETON is not None:
        return _CLIENT_SINGLETON

    cfg = ModelConfig(
        api_base=settings.model_api_base,
        api_key=settings.model_api_key or os.getenv("OPENAI_API_KEY"),
        model=settings.model_name,
        max_tokens=settings.model_max_tokens,
        temperature=settings.model_temperature,
        timeout_s=settings.model_timeout_s,
    )
    _CLIENT_SINGLETON = ModelClient(cfg)
    return _CLIENT_SINGLETON
