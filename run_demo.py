#!/usr/bin/env python3
"""
run_demo.py: parse sample Safe pastes through the running service.

Usage:
  python run_demo.py                                      # both sample pastes
  python run_demo.py my_paste.txt other_paste.txt         # your own copies
  python run_demo.py --external                           # service already up

For each paste file the script posts the text to POST /parse and prints
what would land in the transaction form, or why nothing did.
"""

from __future__ import annotations

import argparse
import logging
import os
import subprocess
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import httpx
from dotenv import load_dotenv

load_dotenv()

HERE = Path(__file__).resolve().parent
SAMPLE_PASTES = [
    HERE / "sample_data" / "sample_paste_clean.txt",
    HERE / "sample_data" / "sample_paste_truncated.txt",
]

HOST = os.getenv("PARSER_HOST", "127.0.0.1")
PORT = int(os.getenv("PARSER_PORT", "8001"))
BASE_URL = os.getenv("PARSER_URL", f"http://{HOST}:{PORT}")
API_KEY = os.getenv("PARSER_API_KEY", "demo-api-key-change-me")
SAFE_VERSION = os.getenv("DEMO_SAFE_VERSION", "1.4.1")

RULE = "=" * 50

logger = logging.getLogger("run_demo")


# ============================================================
# Service
# ============================================================


@contextmanager
def parser_service(startup_timeout: float = 15.0) -> Iterator[None]:
    """Run ``paste_parser.main:app`` under uvicorn for the duration of the block."""
    cmd = [
        sys.executable, "-m", "uvicorn", "paste_parser.main:app",
        "--host", HOST, "--port", str(PORT), "--log-level", "warning",
    ]
    proc = subprocess.Popen(
        cmd,
        cwd=HERE,
        env={**os.environ, "PARSER_API_KEY": API_KEY},
        stdout=subprocess.DEVNULL,
        stderr=subprocess.PIPE,
    )
    try:
        if not _await_health(proc, startup_timeout):
            stderr = proc.stderr.read().decode(errors="replace") if proc.poll() is not None else ""
            raise RuntimeError(f"paste parser did not become healthy on {BASE_URL}\n{stderr}".rstrip())
        yield
    finally:
        proc.terminate()
        try:
            proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            proc.kill()


def _await_health(proc: subprocess.Popen, timeout: float) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline and proc.poll() is None:
        try:
            if httpx.get(f"{BASE_URL}/health", timeout=2.0).is_success:
                return True
        except httpx.TransportError:
            pass
        time.sleep(0.25)
    return False


# ============================================================
# Report
# ============================================================


def _network_line(fields: dict) -> str:
    if not fields.get("chain_id"):
        if fields.get("detected_short_name"):
            return f"unknown shortname {fields['detected_short_name']!r}"
        return "not found in paste"
    line = f"{fields.get('network') or 'unsupported'} (chain {fields['chain_id']}, via {fields['detected_short_name']})"
    aliases = [n for n in fields.get("all_network_short_names") or [] if n != fields["detected_short_name"]]
    if aliases:
        line += f", also known as {', '.join(aliases)}"
    return line


def render_report(path: Path, result: dict) -> str:
    outcome = result["outcome"]
    fields = outcome.get("fields") or {}
    icon = {"error": "\u274c", "warning": "\u26a0\ufe0f"}.get(outcome["severity"], "\u2705")

    lines = [
        RULE,
        f"\U0001f4cb {path.name}",
        RULE,
        f"request {result['request_id']}  trace {result['trace_id']}",
        f"\U0001f310 network: {_network_line(fields)}",
        "",
        f"{icon} {outcome['kind']}: {outcome['message']}",
    ]
    lines += [f"   {i}. {step}" for i, step in enumerate(outcome["instructions"], 1)]

    if outcome["applied"]:
        lines += ["", "\U0001f4dd form:"]
        lines += [f"   {name:<16} {value}" for name, value in result["form"].items() if value not in ("", 0)]
    return "\n".join(lines)


# ============================================================
# Main
# ============================================================


def parse_files(paths: list[Path]) -> None:
    with httpx.Client(base_url=BASE_URL, headers={"X-API-Key": API_KEY}, timeout=30.0) as client:
        for path in paths:
            text = path.read_text(encoding="utf-8")
            resp = client.post("/parse", json={"text": text, "method": "direct", "version": SAFE_VERSION})
            resp.raise_for_status()
            print(render_report(path, resp.json()))
            print()


def main() -> None:
    ap = argparse.ArgumentParser(description="Safe transaction paste parser demo")
    ap.add_argument("pastes", nargs="*", type=Path, default=SAMPLE_PASTES, help="text files holding copied Safe transactions")
    ap.add_argument("--external", action="store_true", help=f"use a service already listening on {BASE_URL}")
    args = ap.parse_args()

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(message)s")

    try:
        if args.external:
            parse_files(args.pastes)
        else:
            with parser_service():
                parse_files(args.pastes)
    except KeyboardInterrupt:
        print("\nInterrupted.")
    except (OSError, RuntimeError, httpx.HTTPError) as exc:
        logger.error("%s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
