"""Runtime settings.

Values come from, in priority order:

1. Explicit arguments (command line flags)
2. ``DEP_ROULETTE_*`` environment variables
3. Built-in defaults
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path
from collections.abc import Mapping


DEFAULT_TIMEOUT = 10.0
DEFAULT_REGISTRY_URL = "https://registry.npmjs.org"

ROOT_ENV_VAR = "DEP_ROULETTE_ROOT"
TIMEOUT_ENV_VAR = "DEP_ROULETTE_TIMEOUT"
REGISTRY_ENV_VAR = "DEP_ROULETTE_REGISTRY"
NPM_ENV_VAR = "DEP_ROULETTE_NPM"
YARN_ENV_VAR = "DEP_ROULETTE_YARN"
SEED_ENV_VAR = "DEP_ROULETTE_SEED"


class ConfigError(RuntimeError):
    """Raised when a setting has an invalid value."""


@dataclass(slots=True, frozen=True)
class Settings:
    """Top-level settings container."""

    root: Path
    timeout: float = DEFAULT_TIMEOUT
    registry_url: str = DEFAULT_REGISTRY_URL
    npm_binary: str = "npm"
    yarn_binary: str = "yarn"
    seed: int | None = None


def _parse_timeout(raw: str | float) -> float:
    try:
        timeout = float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid timeout {raw!r} (must be a number of seconds)") from exc
    if not math.isfinite(timeout):
        raise ConfigError(f"Invalid timeout {raw!r} (must be a finite number)")
    if timeout <= 0:
        raise ConfigError(f"Invalid timeout {raw!r} (must be positive)")
    return timeout


def _parse_seed(raw: str | int) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid seed {raw!r} (must be an integer)") from exc


def load_settings(
    root: Path | str | None = None,
    *,
    timeout: float | None = None,
    seed: int | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build settings from arguments, the environment and defaults.

    Raises:
        ConfigError: If a value is malformed or the root is not a directory.
    """
    env = os.environ if environ is None else environ

    if root is None:
        root = env.get(ROOT_ENV_VAR) or Path.cwd()
    root_path = Path(root)
    if not root_path.is_dir():
        raise ConfigError(f"Project root is not a directory: {root_path}")

    if timeout is None:
        timeout = _parse_timeout(env.get(TIMEOUT_ENV_VAR) or DEFAULT_TIMEOUT)
    else:
        timeout = _parse_timeout(timeout)

    if seed is None and env.get(SEED_ENV_VAR):
        seed = _parse_seed(env[SEED_ENV_VAR])

    registry_url = (env.get(REGISTRY_ENV_VAR) or DEFAULT_REGISTRY_URL).rstrip("/")

    return Settings(
        root=root_path.resolve(),
        timeout=timeout,
        registry_url=registry_url,
        npm_binary=env.get(NPM_ENV_VAR) or "npm",
        yarn_binary=env.get(YARN_ENV_VAR) or "yarn",
        seed=seed,
    )
