"""The single configuration structure loaded by every agent."""

import copy
import os
import re
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Mapping

from .schema import SemVer


class ConfigError(Exception):
    """Raised when configuration cannot be read, parsed or validated."""


@dataclass
class CoreConfig:
    chain_id: str
    block_time_ms: int
    max_block_size: int
    gas_enabled: bool
    deterministic_mode: bool


@dataclass
class StorageConfig:
    db_path: str
    cache_size_mb: int
    flush_interval_sec: int


@dataclass
class SolanaConfig:
    rpc_endpoint: str
    commitment: str
    max_concurrent_queries: int
    query_timeout_ms: int


@dataclass
class ProofConfig:
    merkle_tree_depth: int = field(metadata={"max": 255})
    anchor_interval_blocks: int = 0
    ipfs_gateway: str = ""
    solana_program_id: str = ""
    receipt_ttl_days: int = 0


@dataclass
class ApiConfig:
    bind_addr: str
    request_timeout_ms: int
    rate_limit_per_min: int
    api_version_header: str


@dataclass
class NetworkConfig:
    listen_addrs: list[str]
    bootstrap_nodes: list[str]
    max_peers: int
    enable_mdns: bool


@dataclass
class LoggingConfig:
    level: str
    format: str
    structured: bool
    output_path: str | None = None


_REQUIRED_KEYS: dict[type, frozenset[str]] = {
    ProofConfig: frozenset(
        {
            "merkle_tree_depth",
            "anchor_interval_blocks",
            "ipfs_gateway",
            "solana_program_id",
            "receipt_ttl_days",
        }
    ),
}

_DEFAULTS: dict[str, Any] = {
    "protocol_version": {"major": 0, "minor": 1, "patch": 0},
    "core": {
        "chain_id": "llm-mina-dev",
        "block_time_ms": 2000,
        "max_block_size": 1000,
        "gas_enabled": True,
        "deterministic_mode": True,
    },
    "storage": {"db_path": "./data", "cache_size_mb": 64, "flush_interval_sec": 30},
    "solana": {
        "rpc_endpoint": "https://api.mainnet-beta.solana.com",
        "commitment": "confirmed",
        "max_concurrent_queries": 10,
        "query_timeout_ms": 30000,
    },
    "proof": {
        "merkle_tree_depth": 20,
        "anchor_interval_blocks": 100,
        "ipfs_gateway": "https://ipfs.io",
        "solana_program_id": "",
        "receipt_ttl_days": 365,
    },
    "api": {
        "bind_addr": "0.0.0.0:8000",
        "request_timeout_ms": 30000,
        "rate_limit_per_min": 100,
        "api_version_header": "X-API-Version",
    },
    "network": {
        "listen_addrs": ["/ip4/0.0.0.0/tcp/0"],
        "bootstrap_nodes": [],
        "max_peers": 50,
        "enable_mdns": True,
    },
    "logging": {"level": "info", "format": "json", "structured": True},
}

_ENV_PREFIX = "llm_mina_"
_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(\d+\.?\d*([eE][+-]?\d+)?|\.\d+([eE][+-]?\d+)?|inf|infinity|nan)", re.I)


def _coerce(value: Any, kind: Any, path: str, lenient: bool) -> Any:
    if kind is bool:
        if isinstance(value, bool):
            return value
        if lenient and isinstance(value, (int, float)):
            return value != 0
        if lenient and isinstance(value, str):
            lowered = value.lower()
            if lowered in ("1", "true", "on", "yes"):
                return True
            if lowered in ("0", "false", "off", "no"):
                return False
        raise ConfigError(f"invalid type for `{path}`: expected a boolean")
    if kind is int:
        if isinstance(value, int) and not isinstance(value, bool):
            number = value
        elif lenient and isinstance(value, str) and _INT_RE.fullmatch(value):
            number = int(value)
        else:
            raise ConfigError(f"invalid type for `{path}`: expected an integer")
        if number < 0:
            raise ConfigError(f"invalid value for `{path}`: expected a non-negative integer")
        return number
    if kind is str:
        if isinstance(value, str):
            return value
        if lenient and isinstance(value, bool):
            return "true" if value else "false"
        if lenient and isinstance(value, (int, float)):
            return str(value)
        raise ConfigError(f"invalid type for `{path}`: expected a string")
    if kind == list[str]:
        if not isinstance(value, list):
            raise ConfigError(f"invalid type for `{path}`: expected a list")
        return [_coerce(item, str, f"{path}[{i}]", lenient) for i, item in enumerate(value)]
    if kind == (str | None):
        return None if value is None else _coerce(value, str, path, lenient)
    raise ConfigError(f"unsupported type for `{path}`")


def _build(cls: type, data: Any, path: str, lenient: bool) -> Any:
    if not isinstance(data, Mapping):
        raise ConfigError(f"invalid type for `{path}`: expected a table")
    required = _REQUIRED_KEYS.get(cls)
    kwargs: dict[str, Any] = {}
    for spec in fields(cls):
        key = f"{path}.{spec.name}" if path else spec.name
        if spec.name not in data:
            if spec.type == (str | None):
                kwargs[spec.name] = None
                continue
            if required is None or spec.name in required:
                raise ConfigError(f"missing field `{key}`")
        value = data[spec.name]
        if isinstance(spec.type, type) and is_dataclass(spec.type):
            kwargs[spec.name] = _build(spec.type, value, key, lenient)
        else:
            kwargs[spec.name] = _coerce(value, spec.type, key, lenient)
        limit = spec.metadata.get("max")
        if limit is not None and kwargs[spec.name] > limit:
            raise ConfigError(f"invalid value for `{key}`: exceeds {limit}")
    try:
        return cls(**kwargs)
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


def _parse_env_value(raw: str) -> Any:
    lowered = raw.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if _INT_RE.fullmatch(raw):
        return int(raw)
    if _FLOAT_RE.fullmatch(raw):
        return float(raw)
    return raw


def _assign(tree: dict[str, Any], path: list[str], value: Any) -> None:
    *parents, leaf = path
    node = tree
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[leaf] = value


@dataclass
class CanonicalConfig:
    """Configuration shared by all agents; each reads only its own sections."""

    protocol_version: SemVer
    core: CoreConfig
    storage: StorageConfig
    solana: SolanaConfig
    proof: ProofConfig
    api: ApiConfig
    network: NetworkConfig
    logging: LoggingConfig

    @classmethod
    def from_file(cls, path: str | os.PathLike) -> "CanonicalConfig":
        """Load from a TOML file; fails on a missing or invalid file."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigError(f"io error: {exc}") from exc
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"toml parse error: {exc}") from exc
        return _build(cls, data, "", lenient=False)

    @classmethod
    def from_env_or_default(cls, environ: Mapping[str, str] | None = None) -> "CanonicalConfig":
        """Explicit defaults overlaid with LLM_MINA_* environment variables.

        The part after the prefix is lower-cased and split on "_" into a
        nested key, so LLM_MINA_LOGGING_LEVEL sets logging.level.
        """
        env = os.environ if environ is None else environ
        data = copy.deepcopy(_DEFAULTS)
        for name, raw in env.items():
            lowered = name.lower()
            if not lowered.startswith(_ENV_PREFIX):
                continue
            rest = lowered[len(_ENV_PREFIX):]
            if not rest:
                continue
            _assign(data, rest.split("_"), _parse_env_value(raw))
        return _build(cls, data, "", lenient=True)