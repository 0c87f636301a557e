# wp_utils/config.py - build ClientConfig / ApiClient from environment variables
import os

from wp_api import ApiClient, ClientConfig

DEFAULT_ENDPOINT = "http://localhost/wp-json/wp/v2/"
DEFAULT_TIMEOUT = 30


def _to_timeout(v, default: float = DEFAULT_TIMEOUT) -> float:
    if v is None or str(v).strip() == "":
        return default
    try:
        t = float(str(v).strip())
    except ValueError:
        return default
    return t if t > 0 else default


def load_config(environ=None) -> ClientConfig:
    """Read WP_API_* variables into an immutable ClientConfig.

    WP_API_USER and WP_API_PASSWORD only take effect when both are set.
    """
    env = os.environ if environ is None else environ

    endpoint = env.get("WP_API_ENDPOINT") or DEFAULT_ENDPOINT
    user = (env.get("WP_API_USER") or "").strip()
    password = env.get("WP_API_PASSWORD") or ""

    return ClientConfig(
        endpoint=endpoint.strip().rstrip("/") + "/",
        auth=(user, password) if user and password else None,
        timeout=_to_timeout(env.get("WP_API_TIMEOUT")),
    )


def create_client(environ=None, session=None) -> ApiClient:
    return ApiClient(load_config(environ), session=session)
