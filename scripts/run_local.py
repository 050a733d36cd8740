from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
BACKEND_ENTRYPOINT = REPO_ROOT / "backend" / "server.py"


def build_env(port: int | None = None, curriculum: str | None = None) -> dict:
    """Child environment for the API process; CLI flags override .env values."""
    env = dict(os.environ)
    if port is not None:
        env["PORT"] = str(port)
    if curriculum:
        env["CURRICULUM_PATH"] = str(Path(curriculum).resolve())
    return env


def run_local(port: int | None = None, curriculum: str | None = None) -> int:
    if not BACKEND_ENTRYPOINT.is_file():
        print(
            f"[run-local] ERROR: backend entrypoint missing: {BACKEND_ENTRYPOINT}",
            file=sys.stderr,
            flush=True,
        )
        return 1

    print("[run-local] Starting GradePath API...", flush=True)
    try:
        proc = subprocess.run(
            [sys.executable, str(BACKEND_ENTRYPOINT)],
            cwd=str(REPO_ROOT),
            env=build_env(port, curriculum),
        )
        return proc.returncode
    except KeyboardInterrupt:
        print("\n[run-local] Stopped by user.", flush=True)
        return 130


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run the GradePath API locally")
    parser.add_argument("--port", type=int, help="Port to listen on (default: PORT or 5000)")
    parser.add_argument("--curriculum", help="Curriculum CSV/TSV to load instead of the built-in template")
    args = parser.parse_args(argv)
    return run_local(port=args.port, curriculum=args.curriculum)


if __name__ == "__main__":
    raise SystemExit(main())
