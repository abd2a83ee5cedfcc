import logging
import os
from pathlib import Path

from dotenv import dotenv_values
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from services.config import KEY_ENV, URL_ENV, load_config
from services.summary_form import ENV_MISSING, SummaryForm, get_form

logger = logging.getLogger("summarizer.settings")

router = APIRouter()

ENV_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env")

# All user-configurable settings and their .env keys
SETTING_KEYS = [URL_ENV, KEY_ENV]

# Keys that should never be exposed in full to the frontend
MASKED_KEYS = {KEY_ENV}


def _read_env() -> dict[str, str]:
    """Read current .env values."""
    if not os.path.exists(ENV_PATH):
        return {}
    return dotenv_values(ENV_PATH)


def _write_env(values: dict[str, str]):
    """Write values to .env, preserving keys not in `values`."""
    existing = _read_env()
    existing.update(values)

    lines = []
    for key, val in existing.items():
        if val is not None:
            lines.append(f"{key}={val}")
    Path(ENV_PATH).write_text("\n".join(lines) + "\n")


def _mask(value: str) -> str:
    """Mask a secret value for display: show last 4 chars only."""
    if not value or len(value) <= 4:
        return "****"
    return "****" + value[-4:]


@router.get("")
async def get_settings():
    """Return current settings. Secrets are masked."""
    env = _read_env()
    settings = {}
    for key in SETTING_KEYS:
        val = env.get(key, "")
        if key in MASKED_KEYS and val:
            settings[key] = _mask(val)
        else:
            settings[key] = val or ""
    return settings


class SettingsUpdate(BaseModel):
    SUPABASE_URL: str | None = None
    SUPABASE_ANON_KEY: str | None = None


@router.post("")
async def update_settings(update: SettingsUpdate, form: SummaryForm = Depends(get_form)):
    """Update settings in .env and rebuild the functions config.

    Only non-None fields are written.
    """
    changes = {}
    for key in SETTING_KEYS:
        val = getattr(update, key, None)
        if val is not None:
            if "\n" in val or "\r" in val:
                return JSONResponse(
                    status_code=400,
                    content={
                        "status": "error",
                        "message": f"{key} must be a single line.",
                    },
                )
            changes[key] = val
    if changes:
        _write_env(changes)
        # Reload env vars into the current process
        for key, val in changes.items():
            os.environ[key] = val
        form.config = load_config()
        logger.info("Settings updated: %s", ", ".join(sorted(changes)))
        if not form.config.missing() and form.status and form.status.text == ENV_MISSING:
            form.clear_status()
    return {"status": "ok", "missing": form.config.missing()}


@router.get("/setup-status")
async def setup_status(form: SummaryForm = Depends(get_form)):
    """Check if the app has the configuration it needs to call the functions."""
    url_ok = bool(form.config.base_url)
    key_ok = bool(form.config.anon_key)
    return {
        "ready": url_ok and key_ok,
        "url_configured": url_ok,
        "key_configured": key_ok,
    }
