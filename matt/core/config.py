"""
Auction configuration parameters for MATT.

Defines the EIP-712 domain bids are signed under, verification limits
and logging paths.

Values are resolved in order (later wins):
1. Dataclass defaults
2. MATT_* environment variables (a .env file is loaded first)
3. An optional JSON config file
"""

import json
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import find_dotenv, load_dotenv

from matt.utils.validation import MAX_BIDS


ENV_PREFIX = "MATT_"

_INT_FIELDS = ("chain_id", "verify_concurrency", "max_bids")


@dataclass
class MattConfig:
    """Auction-wide configuration parameters"""

    # EIP-712 domain
    domain_name: str = "MattAuction"
    domain_version: str = "1"
    chain_id: int = 31337  # Local hardhat network
    verifying_contract: Optional[str] = None

    # Bid intake and verification
    max_bids: int = MAX_BIDS  # Per bid file
    verify_concurrency: Optional[int] = None  # None = unbounded fan-out

    # Logging
    log_dir: Path = Path("logs")
    log_to_file: bool = False

    def __post_init__(self):
        if self.verify_concurrency is not None and self.verify_concurrency < 1:
            raise ValueError(f"verify_concurrency must be >= 1, got {self.verify_concurrency}")
        if self.max_bids < 1:
            raise ValueError(f"max_bids must be >= 1, got {self.max_bids}")
        self.log_dir = Path(self.log_dir)


def _coerce(name: str, raw: str) -> Any:
    """Convert an environment string to the field's type."""
    if name in _INT_FIELDS:
        try:
            return int(raw, 0)
        except ValueError:
            raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if name == "log_to_file":
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if name == "log_dir":
        return Path(raw)
    return raw


def _check_value(name: str, value: Any) -> Any:
    """Type-check one JSON config value; strings go through _coerce."""
    if value is None and name in ("verifying_contract", "verify_concurrency"):
        return None
    if isinstance(value, str):
        return _coerce(name, value)
    # bool is an int subclass, JSON true is not a chain id
    if name in _INT_FIELDS and isinstance(value, int) and not isinstance(value, bool):
        return value
    if name == "log_to_file" and isinstance(value, bool):
        return value
    expected = "an integer" if name in _INT_FIELDS else "a boolean" if name == "log_to_file" else "a string"
    raise ValueError(f"{name} must be {expected}, got {json.dumps(value)}")


def _from_env() -> Dict[str, Any]:
    overrides = {}
    for f in fields(MattConfig):
        raw = os.environ.get(ENV_PREFIX + f.name.upper())
        if raw is not None and raw != "":
            overrides[f.name] = _coerce(f.name, raw)
    return overrides


def _from_file(config_path: str) -> Dict[str, Any]:
    data = json.loads(Path(config_path).read_text())
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a JSON object: {config_path}")

    known = {f.name for f in fields(MattConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
    return {name: _check_value(name, value) for name, value in data.items()}


def load_config(config_path: Optional[str] = None, env_file: Optional[str] = None) -> MattConfig:
    """
    Load configuration from environment and file, falling back to defaults.

    Args:
        config_path: Optional path to a JSON config file
        env_file: Optional .env path (defaults to searching from the cwd)

    Returns:
        MattConfig instance
    """
    load_dotenv(env_file or find_dotenv(usecwd=True))

    config = replace(MattConfig(), **_from_env())
    if config_path:
        config = replace(config, **_from_file(config_path))

    return config
