# Common language: Environment/ops probe that surfaces library versions, model config, and credential presence.
# Use this after deploys to confirm the proxy can reach its model service config.

from fastapi import APIRouter
from ..core.settings import settings
import os, sys, importlib

router = APIRouter(tags=["health"])

def _ver(modname: str) -> str:
    try:
        m = importlib.import_module(modname)
        return getattr(m, "__version__", "unknown")
    except ImportError:
        return "not-installed"

@router.get("/healthz")
def healthz():
    return {
        "status": "ok",
        "python": sys.version.split()[0],
        "versions": {
            "fastapi": _ver("fastapi"),
            "uvicorn": _ver("uvicorn"),
            "pydantic": _ver("pydantic"),
            "pydantic_settings": _ver("pydantic_settings"),
            "httpx": _ver("httpx"),
            "PIL": _ver("PIL"),
        },
        "model": {
            "api_base": settings.model_api_base,
            "name": settings.model_name,
            "max_tokens": settings.model_max_tokens,
            "timeout_s": settings.model_timeout_s,
        },
        "flows": {
            "caption_count": settings.caption_count,
            "max_photo_bytes": settings.max_photo_bytes,
        },
        "env_keys_present": {
            "MODEL_API_KEY": bool(settings.model_api_key),
            "OPENAI_API_KEY": bool(os.getenv("OPENAI_API_KEY")),
        },
    }
