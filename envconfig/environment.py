"""Environment configuration for the backend process."""

import math
import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, MutableMapping, Optional, Union

from dotenv import dotenv_values

from .logger import get_component_logger

log = get_component_logger("environment")

# The .env file lives in the project root, two levels above this module
PACKAGE_DIR = Path(__file__).resolve().parent
ENV_PATH = PACKAGE_DIR.parent / ".env"

DEFAULT_NODE_ENV = "development"
DEFAULT_PORT = "3000"

# Lenient base-10 parse: leading whitespace, optional sign, leading digits
_INT_PREFIX = re.compile(r"\s*([+-]?[0-9]+)")

# camelCase names accepted as aliases of the record's fields
KEY_ALIASES = {
    "nodeEnv": "node_env",
    "databaseUrl": "database_url",
    "jwtSecret": "jwt_secret",
}

SECRET_FIELDS = ("database_url", "jwt_secret")


@dataclass(frozen=True)
class EnvironmentConfig:
    """
    Process-wide configuration snapshot.

    Four typed fields plus an ``extra`` mapping for extension keys the
    deployment asks for by name. Reads go through attributes or mapping-style
    lookups; the snapshot is never mutated after it is built.
    """

    node_env: str = DEFAULT_NODE_ENV
    port: Union[int, float] = int(DEFAULT_PORT)
    database_url: Optional[str] = None
    jwt_secret: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict, hash=False)

    @staticmethod
    def _resolve(key: str) -> str:
        return KEY_ALIASES.get(key, key)

    @classmethod
    def field_names(cls) -> List[str]:
        """Names of the typed fields, in declaration order."""
        return [f.name for f in fields(cls) if f.name != "extra"]

    @property
    def is_production(self) -> bool:
        return self.node_env == "production"

    def keys(self) -> List[str]:
        return self.field_names() + list(self.extra)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a value by field name, camelCase alias or extension key.

        Args:
            key: Name to look up
            default: Returned when the key is not part of the snapshot

        Returns:
            The snapshot value, or default
        """
        name = self._resolve(key)
        if name in self.field_names():
            return getattr(self, name)
        return self.extra.get(name, default)

    def __getitem__(self, key: str) -> Any:
        name = self._resolve(key)
        if name in self.field_names():
            return getattr(self, name)
        return self.extra[name]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        name = self._resolve(key)
        return name in self.field_names() or name in self.extra

    def as_dict(self) -> Dict[str, Any]:
        """Flat dict of typed fields followed by extension keys."""
        data = {name: getattr(self, name) for name in self.field_names()}
        data.update(self.extra)
        return data

    def redacted(self) -> Dict[str, Any]:
        """Same as as_dict() with secret values masked, for display."""
        data = self.as_dict()
        for name in SECRET_FIELDS:
            if data.get(name):
                data[name] = "********"
        return data


def load_env_file(
    path: Path = ENV_PATH,
    environ: Optional[MutableMapping[str, str]] = None
) -> Dict[str, str]:
    """
    Seed the environment from a dotenv file without overriding anything.

    Args:
        path: Location of the dotenv file
        environ: Environment to update (defaults to os.environ)

    Returns:
        The KEY=VALUE pairs that were applied
    """
    if environ is None:
        environ = os.environ

    path = Path(path)
    if not path.is_file():
        log.debug(f"No env file at {path}, using process environment only")
        return {}

    try:
        values = dotenv_values(path, encoding="utf-8", interpolate=False)
    except (OSError, UnicodeDecodeError) as e:
        log.debug(f"Could not read env file {path}: {e}")
        return {}

    applied = {}
    for key, value in values.items():
        if value is None or key in environ:
            continue
        environ[key] = value
        applied[key] = value

    log.debug(f"Loaded {len(applied)} variable(s) from {path}")
    return applied


def parse_int(value: Optional[str], default: str = DEFAULT_PORT) -> Union[int, float]:
    """
    Parse a base-10 integer the lenient way.

    The default is substituted only when the value is absent or empty. A
    value without leading digits yields NaN instead of raising.
    """
    text = value or default
    match = _INT_PREFIX.match(text)
    if match is None:
        log.debug(f"Not an integer: {text!r}")
        return math.nan
    return int(match.group(1))


def build_config(
    environ: Optional[Mapping[str, str]] = None,
    extra_keys: Iterable[str] = ()
) -> EnvironmentConfig:
    """
    Build a configuration snapshot from an environment mapping.

    Args:
        environ: Environment to read (defaults to os.environ)
        extra_keys: Additional variable names to capture into ``extra``

    Returns:
        A new EnvironmentConfig
    """
    if environ is None:
        environ = os.environ

    extra = {key: environ[key] for key in extra_keys if key in environ}

    return EnvironmentConfig(
        node_env=environ.get("NODE_ENV") or DEFAULT_NODE_ENV,
        port=parse_int(environ.get("PORT")),
        database_url=environ.get("DATABASE_URL"),
        jwt_secret=environ.get("JWT_SECRET"),
        extra=extra,
    )


def production_advisories(config: EnvironmentConfig) -> List[str]:
    """Messages for settings a production deployment is missing, without logging them."""
    advisories = []
    if not config.is_production:
        return advisories

    if not config.database_url:
        advisories.append("WARNING: DATABASE_URL is not set for production environment.")
    if not config.jwt_secret:
        advisories.append("WARNING: JWT_SECRET is not set for production environment.")
    return advisories


def validate_production_readiness(config: EnvironmentConfig) -> List[str]:
    """
    Warn about settings a production deployment should not run without.

    Advisory only: nothing is raised and startup continues.

    Returns:
        The warning messages that were emitted
    """
    warnings = production_advisories(config)
    for message in warnings:
        log.warning(message)
    return warnings


def parse_key_list(raw: Optional[str]) -> List[str]:
    """Split a comma-separated list of variable names."""
    return [key.strip() for key in (raw or "").split(",") if key.strip()]


def load_environment(
    env_file: Path = ENV_PATH,
    environ: Optional[MutableMapping[str, str]] = None,
    extra_keys: Optional[Iterable[str]] = None
) -> EnvironmentConfig:
    """
    Seed from the dotenv file, build the snapshot and run the production check.

    Args:
        env_file: Location of the dotenv file
        environ: Environment to seed and read (defaults to os.environ)
        extra_keys: Extension keys to capture; read from ENVCONFIG_EXTRA_KEYS
            after seeding when not given

    Returns:
        The new snapshot
    """
    if environ is None:
        environ = os.environ

    load_env_file(env_file, environ)
    if extra_keys is None:
        extra_keys = parse_key_list(environ.get("ENVCONFIG_EXTRA_KEYS"))

    snapshot = build_config(environ, extra_keys)
    validate_production_readiness(snapshot)
    return snapshot


# Process-wide snapshot, built once at import
config = load_environment()


def get_env(key: str) -> Any:
    """Get a single value from the process-wide snapshot (None when absent)."""
    return config.get(key)


def get_all_env() -> EnvironmentConfig:
    """
    Get the whole process-wide snapshot.

    Returned by reference; treat it as read-only.
    """
    return config
