import os

from pydantic import BaseModel

URL_ENV = "SUPABASE_URL"
KEY_ENV = "SUPABASE_ANON_KEY"


class FunctionsConfig(BaseModel):
    """Where the remote functions live and how to authenticate to them."""

    base_url: str = ""
    anon_key: str = ""

    def function_url(self, name: str) -> str:
        return f"{self.base_url.rstrip('/')}/functions/v1/{name}"

    def missing(self) -> list[str]:
        """Names of the environment variables that are not set."""
        missing = []
        if not self.base_url:
            missing.append(URL_ENV)
        if not self.anon_key:
            missing.append(KEY_ENV)
        return missing


def load_config() -> FunctionsConfig:
    """Build the config from the current process environment."""
    return FunctionsConfig(
        base_url=os.getenv(URL_ENV, "").strip().rstrip("/"),
        anon_key=os.getenv(KEY_ENV, "").strip(),
    )
