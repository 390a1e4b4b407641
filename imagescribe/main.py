"""
Purpose:
- FastAPI application factory and router mounts for the ImageScribe prompt proxy.
- Adds CORS so the browser session can call the flows directly.
- Uvicorn will serve this on settings.host:settings.port.
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .core.settings import settings
from .api.health import router as health_router
from .api.flows import router as flows_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

def create_app() -> FastAPI:
    app = FastAPI(title="ImageScribe API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(health_router)
    app.include_router(flows_router)
    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
