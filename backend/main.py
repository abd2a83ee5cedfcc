import logging
import os
from contextlib import asynccontextmanager

import httpx
from dotenv import load_dotenv
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from models.schemas import FormState
from routers import email, settings, summary, transcript
from services.config import FunctionsConfig, load_config
from services.logging_setup import configure_logging
from services.summary_form import SummaryForm, get_form

load_dotenv()

logger = logging.getLogger("summarizer")


def create_app(
    config: FunctionsConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the app. Config comes from the environment unless given."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(os.getenv("LOG_DIR", ""))
        app_config = config if config is not None else load_config()
        logger.info("SUPABASE_URL: %s", app_config.base_url or "Missing")
        logger.info(
            "SUPABASE_ANON_KEY: %s", "Present" if app_config.anon_key else "Missing"
        )
        app.state.form = SummaryForm(app_config, transport=transport)
        yield

    app = FastAPI(title="AI Meeting Notes Summarizer", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(transcript.router, prefix="/api/transcript")
    app.include_router(summary.router, prefix="/api/summary")
    app.include_router(email.router, prefix="/api/email")
    app.include_router(settings.router, prefix="/api/settings")

    @app.get("/api/health")
    async def health():
        return {"status": "healthy"}

    @app.get("/api/config")
    async def public_config(form: SummaryForm = Depends(get_form)):
        """Return non-secret config values the frontend needs."""
        return {
            "supabase_url": form.config.base_url,
            "key_configured": bool(form.config.anon_key),
        }

    @app.get("/api/state", response_model=FormState)
    async def state(form: SummaryForm = Depends(get_form)):
        return form.snapshot()

    @app.delete("/api/state/status", response_model=FormState)
    async def dismiss_status(form: SummaryForm = Depends(get_form)):
        form.clear_status()
        return form.snapshot()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="127.0.0.1", port=int(os.getenv("PORT", "8000")))
