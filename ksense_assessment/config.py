import os
from dataclasses import dataclass

from .errors import ConfigError

DEFAULT_BASE_URL = "https://assessment.ksensetech.com/api"
API_KEY_VARS = ("YOUR_API_KEY", "KSENSE_API_KEY")


@dataclass(frozen=True)
class Settings:
    api_key: str
    base_url: str = DEFAULT_BASE_URL

    @classmethod
    def from_env(cls, environ=None, api_key=None, base_url=None):
        environ = os.environ if environ is None else environ
        api_key = (api_key or "").strip()
        if not api_key:
            api_key = next((environ[v].strip() for v in API_KEY_VARS if (environ.get(v) or "").strip()), "")
        if not api_key:
            raise ConfigError(f"Missing API key: set {' or '.join(API_KEY_VARS)} or pass --api-key")
        base_url = base_url or environ.get("KSENSE_BASE_URL") or DEFAULT_BASE_URL
        return cls(api_key=api_key, base_url=base_url)
