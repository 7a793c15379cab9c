"""
Configuration module — loads environment variables, defines constants and
parses the YAML wallet list.
"""

import os
from dataclasses import dataclass

import yaml
from dotenv import load_dotenv

load_dotenv()

# ── Files ─────────────────────────────────────────────────────────────────────
DEFAULT_CONFIG_PATH: str = os.getenv("BALANCE_CHECKER_CONFIG", "config.yaml")

# ── RPC ───────────────────────────────────────────────────────────────────────
RPC_METHOD: str = "getBalance"
RPC_REQUEST_ID: int = 1
LAMPORTS_PER_SOL: int = 1_000_000_000
UNIT: str = "SOL"

# ── Concurrency ───────────────────────────────────────────────────────────────
MAX_CONCURRENCY: int = int(os.getenv("MAX_CONCURRENCY", "0"))  # 0 = unbounded

# ── Logging ───────────────────────────────────────────────────────────────────
LOG_FILE: str = os.getenv("LOG_FILE", "")
LOG_ROTATION: str = os.getenv("LOG_ROTATION", "10 MB")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


class ConfigError(Exception):
    """Base class for configuration failures. Always fatal."""

    def __init__(self, path: str, cause: str):
        self.path = path
        self.cause = cause
        super().__init__(f"{path}: {cause}")


class ConfigNotFoundError(ConfigError):
    pass


class ConfigParseError(ConfigError):
    pass


@dataclass(frozen=True)
class Config:
    rpc_url: str
    wallets: tuple[str, ...]


def load_config(path: str | os.PathLike = DEFAULT_CONFIG_PATH) -> Config:
    """
    Read the YAML config at `path`.

    Expected shape:
        rpc_url: https://api.mainnet-beta.solana.com
        wallets:
          - <address>
          - <address>
    """
    path = os.fspath(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigNotFoundError(path, f"cannot open file ({e.strerror or e})") from e
    except yaml.YAMLError as e:
        raise ConfigParseError(path, f"invalid YAML: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigParseError(path, f"invalid encoding: {e}") from e

    return _parse_config(path, raw)


def _parse_config(path: str, raw) -> Config:
    if not isinstance(raw, dict):
        raise ConfigParseError(path, "expected a mapping with 'rpc_url' and 'wallets'")

    for key in ("rpc_url", "wallets"):
        if key not in raw:
            raise ConfigParseError(path, f"missing field '{key}'")

    rpc_url = raw["rpc_url"]
    if not isinstance(rpc_url, str):
        raise ConfigParseError(path, f"'rpc_url' must be a string, got {type(rpc_url).__name__}")
    if not rpc_url.strip():
        raise ConfigParseError(path, "'rpc_url' must not be empty")

    wallets = raw["wallets"]
    if not isinstance(wallets, list):
        raise ConfigParseError(path, f"'wallets' must be a list, got {type(wallets).__name__}")
    for i, wallet in enumerate(wallets):
        if not isinstance(wallet, str):
            raise ConfigParseError(
                path, f"'wallets[{i}]' must be a string, got {type(wallet).__name__}"
            )

    return Config(rpc_url=rpc_url, wallets=tuple(wallets))
