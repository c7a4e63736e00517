from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Optional

from taostake.utils.env import _env_csv, _env_float, _env_int, _env_str


SourceKind = Literal["memory", "remote"]


@dataclass(frozen=True)
class ApiEnvConfig:
    source: SourceKind
    snapshot_path: Optional[str]
    upstream_url: Optional[str]
    upstream_timeout_s: float
    cors_origins: List[str]
    host: str
    port: int


def _die(msg: str) -> None:
    raise SystemExit(f"[taostake] {msg}")


def load_api_env() -> ApiEnvConfig:
    """Load provider API configuration from env/.env with strict validation."""
    source_raw = (_env_str("TAOSTAKE_SOURCE", "memory") or "memory").lower()
    if source_raw not in ("memory", "remote"):
        _die(f"Invalid TAOSTAKE_SOURCE={source_raw!r} (expected 'memory' or 'remote').")
    source: SourceKind = "remote" if source_raw == "remote" else "memory"

    snapshot_path = _env_str("TAOSTAKE_SNAPSHOT_PATH", "") or None

    upstream_url = _env_str("TAOSTAKE_UPSTREAM_URL", "").rstrip("/") or None
    if source == "remote":
        if not upstream_url:
            _die("Missing required env var: TAOSTAKE_UPSTREAM_URL (required when TAOSTAKE_SOURCE=remote).")
        if not upstream_url.startswith("http"):
            _die(f"TAOSTAKE_UPSTREAM_URL must be http(s). Got: {upstream_url!r}")

    try:
        upstream_timeout_s = _env_float("TAOSTAKE_UPSTREAM_TIMEOUT_S", 5.0)
        port = _env_int("TAOSTAKE_API_PORT", 3001)
    except ValueError as exc:
        _die(f"Invalid numeric env var: {exc}")
    upstream_timeout_s = max(0.5, min(60.0, upstream_timeout_s))

    cors_origins = _env_csv("TAOSTAKE_CORS_ORIGINS", "*") or ["*"]

    return ApiEnvConfig(
        source=source,
        snapshot_path=snapshot_path,
        upstream_url=upstream_url,
        upstream_timeout_s=float(upstream_timeout_s),
        cors_origins=cors_origins,
        host=_env_str("TAOSTAKE_API_HOST", "127.0.0.1") or "127.0.0.1",
        port=int(port),
    )
