from typing import Any
from urllib.parse import urlparse


def is_valid_url(value: str) -> bool:
    v = value.strip()
    try:
        parsed = urlparse(v)
        return bool(parsed.scheme in ("http", "https") and parsed.netloc)
    except Exception:
        return False


def is_non_empty_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())
