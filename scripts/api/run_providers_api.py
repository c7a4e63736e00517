from __future__ import annotations

import sys
from pathlib import Path

# Allow running as a script without requiring `PYTHONPATH=.`.
REPO_ROOT = Path(__file__).resolve().parents[2]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

import argparse

import bittensor as bt
import uvicorn

from taostake.api.config import load_api_env


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Serve the taostake provider read-API.")
    parser.add_argument("--host", type=str, default=None, help="Bind host (default: TAOSTAKE_API_HOST).")
    parser.add_argument("--port", type=int, default=None, help="Bind port (default: TAOSTAKE_API_PORT).")
    parser.add_argument("--log-level", type=str, default="info", help="uvicorn log level.")
    args = parser.parse_args(argv)

    # Validate env up front so misconfiguration exits before uvicorn starts.
    cfg = load_api_env()
    host = args.host or cfg.host
    port = args.port or cfg.port

    bt.logging.info(f"Starting taostake provider API on {host}:{port} (source={cfg.source})")
    uvicorn.run("taostake.api.app:app_from_env", factory=True, host=host, port=port, log_level=args.log_level)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
