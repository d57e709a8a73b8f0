#!/usr/bin/env python3
"""muxctl diagnostic.

Checks the fundamental assumptions of driving a multiplexer, one layer at a
time, and prints what happened at each layer.

Usage:
    python -m muxctl.diagnostic                 # Run all diagnostics
    python -m muxctl.diagnostic --backend tmux  # Force a backend
    python -m muxctl.diagnostic --keep          # Leave the scratch session running
"""

import argparse
import time
import uuid
from datetime import datetime

from muxctl.backends import get_backend
from muxctl.backends.base import MultiplexerBackend
from muxctl.errors import MuxError
from muxctl.escape import encode_sgr_mouse

SCRATCH_PREFIX = "muxctl-diag-"
ECHO_DELAY = 0.5

# =============================================================================
# LAYER 1: Can we even find the multiplexer?
# =============================================================================


def check_available(backend: MultiplexerBackend) -> dict:
    """Check the multiplexer is on PATH."""
    result = {"test": f"{backend.backend_name}_available", "passed": False, "details": {}}
    result["passed"] = backend.is_available()
    if not result["passed"]:
        result["details"]["error"] = f"{backend.backend_name} not found in PATH"
    return result


# =============================================================================
# LAYER 2: Session listing
# =============================================================================


def check_list_sessions(backend: MultiplexerBackend, prefix: str = "") -> dict:
    """List sessions, treating "no server running" as zero sessions."""
    result = {"test": "list_sessions", "passed": False, "details": {}}
    try:
        sessions = backend.list_sessions(prefix)
        result["details"]["sessions"] = sessions
        result["details"]["count"] = len(sessions)
        result["passed"] = True
    except MuxError as e:
        result["details"]["error"] = str(e)
        # With no sessions tmux has no server, which is not a failure of tmux itself
        result["passed"] = "no server" in str(e).lower()
    return result


# =============================================================================
# LAYER 3: Scratch session round trip
# =============================================================================


def check_round_trip(backend: MultiplexerBackend, keep: bool = False) -> dict:
    """Create a scratch session and exercise every pane operation against it."""
    name = f"{SCRATCH_PREFIX}{uuid.uuid4().hex[:8]}"
    result = {"test": "round_trip", "session": name, "passed": False, "details": {}}
    details = result["details"]

    try:
        backend.create_session(name, env={"MUXCTL_DIAG": "1"})
        details["has_session"] = backend.has_session(name)

        backend.set_manual_sizing(name)
        backend.resize_pane(name, 80, 24)
        details["pane_size"] = tuple(backend.query_pane_size(name))

        backend.send_literal(name, "echo muxctl-literal")
        backend.send_keys(name, "Enter")
        backend.load_clipboard_buffer("echo muxctl-paste")
        backend.paste_clipboard_buffer(name)
        backend.send_keys(name, "Enter")
        # A shell prompt does not enable mouse mode; discard the echoed sequence
        backend.send_mouse_event(name, 0, 1, 1)
        backend.send_keys(name, "C-c")
        details["mouse_sequence"] = repr(encode_sgr_mouse(0, 1, 1))
        time.sleep(ECHO_DELAY)

        content = backend.capture_pane_output(name, scrollback=100)
        details["literal_echoed"] = "muxctl-literal" in content
        details["paste_echoed"] = "muxctl-paste" in content
        details["content_tail"] = content.strip()[-200:]

        result["passed"] = (
            details["has_session"] and details["literal_echoed"] and details["paste_echoed"]
        )
    except MuxError as e:
        details["error"] = str(e)
    finally:
        if not keep and backend.has_session(name):
            backend.kill_session(name)
            details["killed"] = not backend.has_session(name)

    return result


def print_result(result: dict, verbose: bool = True):
    """Print a single diagnostic result."""
    status = "PASS" if result["passed"] else "FAIL"
    color = "\033[92m" if result["passed"] else "\033[91m"
    reset = "\033[0m"
    print(f"\n{color}{status} {result['test']}{reset}")

    if "session" in result:
        print(f"  Session: {result['session']}")

    if verbose:
        for key, value in result["details"].items():
            if isinstance(value, list):
                if value:
                    print(f"  {key}:")
                    for item in value:
                        print(f"    - {item}")
                else:
                    print(f"  {key}: (none)")
            elif isinstance(value, str) and len(value) > 100:
                print(f"  {key}: {value[:100]}...")
            else:
                print(f"  {key}: {value}")


def run_full_diagnostic(
    backend_name: str | None = None,
    prefix: str = "",
    keep: bool = False,
    verbose: bool = True,
) -> bool:
    """Run all diagnostic layers. Returns True if every layer passed."""
    backend = get_backend(backend_name)

    print("=" * 60)
    print("MUXCTL DIAGNOSTIC")
    print(f"Time: {datetime.now().isoformat()}")
    print(f"Backend: {backend.backend_name}")
    print("=" * 60)

    print(f"\n--- LAYER 1: {backend.backend_name} Availability ---")
    available = check_available(backend)
    print_result(available, verbose)
    if not available["passed"]:
        return False

    print("\n--- LAYER 2: Session Listing ---")
    listing = check_list_sessions(backend, prefix)
    print_result(listing, verbose)

    print("\n--- LAYER 3: Scratch Session Round Trip ---")
    round_trip = check_round_trip(backend, keep=keep)
    print_result(round_trip, verbose)

    return listing["passed"] and round_trip["passed"]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="muxctl diagnostic")
    parser.add_argument("--backend", "-b", choices=["tmux", "psmux"], help="Force a backend")
    parser.add_argument("--prefix", "-p", default="", help="Only list sessions with this prefix")
    parser.add_argument("--keep", action="store_true", help="Keep the scratch session")
    parser.add_argument("--quiet", "-q", action="store_true", help="Less verbose output")

    args = parser.parse_args(argv)
    passed = run_full_diagnostic(
        backend_name=args.backend,
        prefix=args.prefix,
        keep=args.keep,
        verbose=not args.quiet,
    )
    return 0 if passed else 1


if __name__ == "__main__":
    raise SystemExit(main())
