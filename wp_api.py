# wp_api.py - WordPress REST API client wrapper around requests
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests.auth import AuthBase

from wp_utils.logger import get_logger

logger = get_logger("wp-api")

TOTAL_HEADER = "X-WP-Total"
PAGES_HEADER = "X-WP-TotalPages"


@dataclass(frozen=True)
class ClientConfig:
    endpoint: str
    # (user, password) tuple or AuthBase passes through to requests unchanged;
    # a plain string is treated as a bearer token
    auth: Any = None
    timeout: float = 30


@dataclass(frozen=True)
class ApiError:
    message: str
    code: Optional[int] = None


@dataclass(frozen=True)
class ApiResult:
    """Uniform return value of every ApiClient call.

    total/pages are the raw X-WP-Total / X-WP-TotalPages header strings,
    or 0 when the header is missing or the request failed.
    """
    results: Any
    total: Any = 0
    pages: Any = 0
    error: Optional[ApiError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, message: str, code: Optional[int] = None) -> "ApiResult":
        return cls(results=[], total=0, pages=0, error=ApiError(message, code))

    def as_dict(self) -> Dict[str, Any]:
        out = {"results": self.results, "total": self.total, "pages": self.pages}
        if self.error is not None:
            err = {"message": self.error.message}
            if self.error.code is not None:
                err["code"] = self.error.code
            out["error"] = err
        return out


def encode_query(params: Optional[Dict[str, Any]], prefix: str = "") -> Dict[str, Any]:
    """Flatten a query mapping the way PHP's http_build_query does.

    None values are dropped, nested dicts become ``key[sub]`` and booleans
    become 1/0. Empty strings are kept.
    """
    flat = {}
    for key, value in (params or {}).items():
        name = f"{prefix}[{key}]" if prefix else str(key)
        if value is None:
            continue
        if isinstance(value, dict):
            flat.update(encode_query(value, name))
        elif isinstance(value, bool):
            flat[name] = int(value)
        else:
            flat[name] = value
    return flat


class TokenAuth(AuthBase):
    """Sends an opaque token as an Authorization: Bearer header."""

    def __init__(self, token: str):
        self.token = token

    def __call__(self, r):
        token = self.token.strip()
        r.headers["Authorization"] = token if token.lower().startswith("bearer ") else f"Bearer {token}"
        return r


def as_requests_auth(auth):
    if isinstance(auth, str):
        return TokenAuth(auth) if auth.strip() else None
    return auth or None


def _trim(value) -> str:
    return "" if value is None else str(value).strip()


def _positive_id(value) -> bool:
    if value is None or isinstance(value, bool):
        return False
    try:
        return float(value) > 0
    except (TypeError, ValueError):
        return False


class ApiClient:
    def __init__(self, config: ClientConfig, session=None):
        self.config = config
        self.session = session if session is not None else requests.Session()
        self._auth = as_requests_auth(config.auth)

    @property
    def endpoint(self) -> str:
        return self.config.endpoint

    # ---------- collections ----------
    def posts(self, page=None) -> ApiResult:
        return self.get("posts", {"page": page})

    def stickies(self, page=None) -> ApiResult:
        return self.get("posts", {"sticky": True, "page": page})

    def pages(self, page=None) -> ApiResult:
        return self.get("pages", {"page": page})

    def categories(self, slug=None) -> ApiResult:
        return self.get("categories", {"per_page": 99, "slug": slug})

    def tags(self, tag=None) -> ApiResult:
        if _positive_id(tag):
            return self.get(f"tags/{tag}", {"per_page": 99})
        return self.get("tags", {"per_page": 99})

    # ---------- single items ----------
    def post_id(self, id) -> ApiResult:
        return self.get(f"posts/{id}")

    def post(self, slug) -> ApiResult:
        return self.get("posts", {"_embed": True, "slug": slug})

    def page(self, slug) -> ApiResult:
        return self.get("posts", {"type": "page", "filter": {"name": slug}})

    def media(self, id) -> ApiResult:
        return self.get(f"media/{id}")

    # ---------- filtered post lists ----------
    def parent_posts(self, parent=None, page=None, per_page=None) -> ApiResult:
        return self.get("posts", {"parent": _trim(parent), "page": page, "per_page": per_page})

    def category_posts(self, cat=None, page=None, per_page=None) -> ApiResult:
        return self.get("posts", {
            "_embed": True,
            "categories": _trim(cat),
            "page": page,
            "per_page": per_page,
        })

    def author_posts(self, name, page=None) -> ApiResult:
        return self.get("posts", {"page": page, "filter": {"author_name": name}})

    def latest_post(self, cat=None) -> ApiResult:
        return self.get("posts", {"categories": _trim(cat), "per_page": 1, "status": "publish"})

    def tag_posts(self, tags, page=None) -> ApiResult:
        # page is accepted for signature parity but the API call never paginates
        return self.get("posts", {"tags": tags})

    def search(self, query, page=None) -> ApiResult:
        return self.get("posts", {"page": page, "filter": {"s": query}})

    def archive(self, year, month, page=None) -> ApiResult:
        return self.get("posts", {"page": page, "filter": {"year": year, "monthnum": month}})

    # ---------- transport ----------
    def get(self, resource: str, params: Optional[Dict[str, Any]] = None) -> ApiResult:
        """GET {endpoint}{resource} and normalize the outcome into an ApiResult.

        Any requests.RequestException (network failure, non-2xx status,
        undecodable body) is converted into ``ApiResult.error``; nothing from
        the transport is raised to the caller.
        """
        url = f"{self.config.endpoint}{resource}"
        options = {"params": encode_query(params), "timeout": self.config.timeout}
        if self._auth is not None:
            options["auth"] = self._auth

        logger.debug("GET %s params=%s", url, options["params"])
        response = None
        try:
            response = self.session.get(url, **options)
            response.raise_for_status()
            results = response.json() if response.content else []
        except requests.exceptions.RequestException as e:
            failed = e.response if e.response is not None else response
            code = failed.status_code if failed is not None else None
            logger.warning("GET %s failed (code=%s): %s", url, code, e)
            return ApiResult.failed(str(e), code)

        return ApiResult(
            results=results,
            total=response.headers.get(TOTAL_HEADER, 0),
            pages=response.headers.get(PAGES_HEADER, 0),
        )
