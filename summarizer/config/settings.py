"""
/**
 * @file summarizer/config/settings.py
 * @description 后端配置加载与合并（config.json + config.local.json + 环境变量）。
 */
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import threading
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional


PACKAGE_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_PATH = os.path.join(PACKAGE_ROOT, "config.json")
CONFIG_LOCAL_PATH = os.path.join(PACKAGE_ROOT, "config.local.json")
CONFIG_EXAMPLE_PATH = os.path.join(PACKAGE_ROOT, "config.example.json")

DEFAULT_API_VERSION = "2022-10-01-preview"
DEFAULT_PORT = 3000
DEFAULT_TIMEOUT = 30.0
RELOAD_DEBOUNCE_SECONDS = 0.5

logger = logging.getLogger("config_loader")


def _load_json(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r") as f:
            value = json.load(f)
            return value if isinstance(value, dict) else {}
    except FileNotFoundError:
        return {}


def _merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _merge_dicts(base[key], value)
        else:
            base[key] = value
    return base


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = raw.get(name, {})
    return value if isinstance(value, dict) else {}


@dataclass(frozen=True)
class Settings:
    raw: Dict[str, Any]

    @property
    def endpoints(self) -> Dict[str, str]:
        return _section(self.raw, "endpoints")

    @property
    def api_keys(self) -> Dict[str, str]:
        return _section(self.raw, "api_keys")

    @property
    def polling(self) -> Dict[str, Any]:
        return _section(self.raw, "polling")

    @property
    def job(self) -> Dict[str, Any]:
        return _section(self.raw, "job")

    @property
    def http(self) -> Dict[str, Any]:
        return _section(self.raw, "http")

    @property
    def api_version(self) -> str:
        value = self.raw.get("api_version")
        return value if isinstance(value, str) and value else DEFAULT_API_VERSION

    @property
    def request_timeout(self) -> float:
        value = self.http.get("timeout_seconds", DEFAULT_TIMEOUT)
        try:
            timeout = float(value)
        except (TypeError, ValueError):
            return DEFAULT_TIMEOUT
        # requests rejects zero or negative timeouts
        return timeout if timeout > 0 else DEFAULT_TIMEOUT

    @property
    def language(self) -> str:
        value = self.job.get("language")
        return value if isinstance(value, str) and value else "en"

    @property
    def sentence_count(self) -> int:
        value = self.job.get("sentence_count", 3)
        return value if isinstance(value, int) and value > 0 else 3

    @property
    def display_name(self) -> str:
        value = self.job.get("display_name")
        return value if isinstance(value, str) and value else "Text Summarization Task"

    @property
    def port(self) -> int:
        value = os.getenv("PORT") or self.raw.get("port")
        try:
            return int(value) if value else DEFAULT_PORT
        except (TypeError, ValueError):
            return DEFAULT_PORT

    @property
    def host(self) -> str:
        return os.getenv("HOST") or str(self.raw.get("host") or "0.0.0.0")

    def resolve_language_key(self) -> Optional[str]:
        return (
            os.getenv("AZURE_LANGUAGE_KEY")
            or os.getenv("LANGUAGE_API_KEY")
            or (self.api_keys.get("language") if isinstance(self.api_keys.get("language"), str) else None)
        )

    def resolve_language_endpoint(self) -> Optional[str]:
        return (
            os.getenv("AZURE_LANGUAGE_ENDPOINT")
            or os.getenv("LANGUAGE_ENDPOINT")
            or (self.endpoints.get("language") if isinstance(self.endpoints.get("language"), str) else None)
        )

    def require_credentials(self) -> None:
        """Raise ConfigurationError unless both the subscription key and the endpoint are configured."""
        from summarizer.services.errors import ConfigurationError
        from summarizer.utils.validators import is_valid_url

        missing = []
        if not self.resolve_language_key():
            missing.append("AZURE_LANGUAGE_KEY")
        endpoint = self.resolve_language_endpoint()
        if not endpoint:
            missing.append("AZURE_LANGUAGE_ENDPOINT")
        if missing:
            raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")
        if not is_valid_url(endpoint):
            raise ConfigurationError(f"Invalid language endpoint: {endpoint}")



def _changed_keys(old: Dict[str, Any], new: Dict[str, Any], prefix: str = "") -> list:
    changed = []
    for key in sorted(set(old) | set(new)):
        path = f"{prefix}.{key}" if prefix else key
        before, after = old.get(key), new.get(key)
        if isinstance(before, dict) and isinstance(after, dict):
            changed.extend(_changed_keys(before, after, path))
        elif key not in old:
            changed.append(f"+{path}")
        elif key not in new:
            changed.append(f"-{path}")
        elif before != after:
            changed.append(f"~{path}")
    return changed


class SettingsStore:
    """
    Holds the merged config and swaps it atomically on reload.

    A reload inside the debounce window, or one whose merged document hashes
    the same as the current one, keeps the current Settings object. A file
    that fails to parse keeps the old settings as well.
    """

    def __init__(
        self,
        base_path: str = CONFIG_PATH,
        local_path: str = CONFIG_LOCAL_PATH,
        example_path: str = CONFIG_EXAMPLE_PATH,
    ):
        self.base_path = base_path
        self.local_path = local_path
        self.example_path = example_path
        self._lock = threading.Lock()
        self._settings: Optional[Settings] = None
        self._digest = ""
        self._loaded_at = 0.0

    @property
    def current(self) -> Optional[Settings]:
        return self._settings

    def _read_merged(self, base_path: str, local_path: str, example_path: str) -> Dict[str, Any]:
        merged = _load_json(base_path)
        if not merged.get("polling") and os.path.exists(example_path):
            merged = _merge_dicts(_load_json(example_path), merged)
        return _merge_dicts(merged, _load_json(local_path))

    def reload(
        self,
        base_path: Optional[str] = None,
        local_path: Optional[str] = None,
        example_path: Optional[str] = None,
        force: bool = False,
    ) -> Settings:
        with self._lock:
            now = time.monotonic()
            if not force and self._settings is not None and now - self._loaded_at < RELOAD_DEBOUNCE_SECONDS:
                return self._settings

            try:
                merged = self._read_merged(
                    base_path or self.base_path,
                    local_path or self.local_path,
                    example_path or self.example_path,
                )
            except (OSError, ValueError) as e:
                logger.error(f"Failed to reload config: {e}. Keeping old config.")
                if self._settings is None:
                    self._settings = Settings(raw={})
                return self._settings

            self._loaded_at = now
            digest = hashlib.sha256(json.dumps(merged, sort_keys=True).encode("utf-8")).hexdigest()
            if self._settings is not None and digest == self._digest:
                return self._settings

            if self._settings is not None:
                # key paths only, values may be secrets
                logger.info(f"Config reloaded, changed keys: {', '.join(_changed_keys(self._settings.raw, merged)) or 'none'}")
            self._settings = Settings(raw=merged)
            self._digest = digest
            return self._settings


_store = SettingsStore()


def reload_settings(
    base_path: str = CONFIG_PATH,
    local_path: str = CONFIG_LOCAL_PATH,
    example_path: str = CONFIG_EXAMPLE_PATH,
    force: bool = False,
) -> Settings:
    return _store.reload(base_path, local_path, example_path, force=force)


def load_settings() -> Settings:
    """
    Get current settings. Lazy loads on first call.
    Subsequent reloads are handled by the file watcher calling reload_settings().
    """
    return _store.current or _store.reload()
