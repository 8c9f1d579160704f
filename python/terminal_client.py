#!/usr/bin/env python3
"""
Interactive console client for the SwitchUp terminal service.

Prints the boot narration, asks for the pass-phrase until access is granted,
then runs a read-eval-print loop against the remote terminal.

Usage:
    # Start the service first:
    uv run python run_terminal_service.py

    # In another terminal:
    uv run python terminal_client.py
    uv run python terminal_client.py --service-url http://localhost:9000 --reboot
"""

from __future__ import annotations

import asyncio
import getpass
import logging
import os
import sys
from typing import Any, Final

import httpx

from terminal_engine.content import SHUTDOWN_LINES

# =============================================================================
# Logging Configuration
# =============================================================================

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger: logging.Logger = logging.getLogger(__name__)


# =============================================================================
# Exit Codes
# =============================================================================

EXIT_SUCCESS: Final[int] = 0
EXIT_CONNECTION_ERROR: Final[int] = 1
EXIT_SERVICE_UNHEALTHY: Final[int] = 2
EXIT_SYSTEM_OFFLINE: Final[int] = 3
EXIT_INTERRUPTED: Final[int] = 130  # Standard SIGINT exit code


# =============================================================================
# Configuration
# =============================================================================

DEFAULT_SERVICE_URL: Final[str] = "http://127.0.0.1:8770"
PROMPT: Final[str] = "guest@switchup:~$ "
POLL_INTERVAL: Final[float] = 0.2
SETTLE_SECONDS: Final[float] = 0.8
OFFLINE_VIEWS: Final[frozenset[str]] = frozenset({"shutdown", "offline"})


# =============================================================================
# Rendering
# =============================================================================

def render_entry(entry: dict[str, Any]) -> None:
    """Print one transcript entry; input echoes are skipped."""
    if entry.get("kind") == "input":
        return
    for line in str(entry.get("content", "")).split("\n"):
        print(line)


async def fetch_json(client: httpx.AsyncClient, path: str, **params: Any) -> dict[str, Any]:
    resp = await client.get(path, params=params or None)
    resp.raise_for_status()
    return resp.json()


# =============================================================================
# Phases
# =============================================================================

async def play_boot(client: httpx.AsyncClient) -> None:
    """Print boot lines as they reveal until the password prompt is shown."""
    shown = 0
    while True:
        boot = await fetch_json(client, "/boot/lines")
        for entry in boot["lines"][shown:]:
            print(f"> {entry['content']}")
        shown = len(boot["lines"])
        if boot["show_password_prompt"] or boot["view"] != "boot":
            break
        await asyncio.sleep(POLL_INTERVAL)
    print("> AUTHENTICATION REQUIRED")


async def pass_gate(client: httpx.AsyncClient) -> None:
    """Ask for the pass-phrase until granted, then wait for the unlock."""
    while True:
        password = await asyncio.to_thread(getpass.getpass, "PASSWORD: ")
        resp = await client.post("/boot/password", json={"password": password})
        body = resp.json()
        if resp.status_code == 200 and body.get("result") == "granted":
            break
        if resp.status_code == 200:
            print("> ACCESS DENIED. TRY AGAIN.")
            continue
        if body.get("error_code") == "BOOT_ALREADY_GRANTED":
            break
        logger.warning("Password rejected: %s", body.get("error"))

    boot = await fetch_json(client, "/boot/lines")
    for entry in boot["lines"]:
        if entry["kind"] == "output":
            print(entry["content"])

    while (await fetch_json(client, "/session/status"))["view"] == "boot":
        await asyncio.sleep(POLL_INTERVAL)


async def play_shutdown(client: httpx.AsyncClient) -> None:
    """Print the shutdown narrative as its phases advance."""
    shown = 0
    while True:
        status = await fetch_json(client, "/session/status")
        phase = status["shutdown_phase"]
        for line in SHUTDOWN_LINES[shown:phase]:
            print(line)
        shown = max(shown, phase)
        if status["view"] == "offline":
            break
        await asyncio.sleep(POLL_INTERVAL)
    print("SYSTEM OFFLINE")


async def run_repl(client: httpx.AsyncClient) -> int:
    """Submit lines and print new entries, including deferred quiz reveals."""
    transcript = await fetch_json(client, "/transcript")
    for entry in transcript["entries"]:
        render_entry(entry)
    last_sequence = transcript["last_sequence"]
    generation = transcript["generation"]

    while True:
        try:
            line = await asyncio.to_thread(input, PROMPT)
        except EOFError:
            print()
            return EXIT_SUCCESS

        resp = await client.post("/terminal/submit", json={"input": line})
        if resp.status_code != 200:
            body = resp.json()
            if body.get("error_code") == "SYSTEM_OFFLINE":
                await play_shutdown(client)
                return EXIT_SUCCESS
            logger.warning("Submit failed: %s", body.get("error"))
            continue

        # Poll briefly so deferred reveals (next question, summary) are printed.
        deadline = asyncio.get_running_loop().time() + SETTLE_SECONDS
        while True:
            transcript = await fetch_json(client, "/transcript", after=last_sequence)
            if transcript["generation"] != generation:
                generation = transcript["generation"]
                print("\033[2J\033[H", end="")
            for entry in transcript["entries"]:
                render_entry(entry)
            last_sequence = transcript["last_sequence"]
            if asyncio.get_running_loop().time() >= deadline:
                break
            await asyncio.sleep(POLL_INTERVAL)

        status = await fetch_json(client, "/session/status")
        # exit hands off to shutdown only after the service-side exit delay.
        while status["exit_pending"] and status["view"] not in OFFLINE_VIEWS:
            await asyncio.sleep(POLL_INTERVAL)
            status = await fetch_json(client, "/session/status")
        if status["view"] in OFFLINE_VIEWS:
            await play_shutdown(client)
            return EXIT_SUCCESS


async def run_client(service_url: str, reboot: bool) -> int:
    """
    Drive one session end to end.

    Args:
        service_url: Base URL of the terminal service.
        reboot: Reboot an offline system instead of exiting.

    Returns:
        Exit code indicating success or failure.
    """
    async with httpx.AsyncClient(base_url=service_url, timeout=10.0) as client:
        logger.info("Checking terminal service health...")
        try:
            resp = await client.get("/health")
            if resp.status_code != 200:
                logger.error("Service not healthy: %d", resp.status_code)
                return EXIT_SERVICE_UNHEALTHY
            logger.info("Service healthy: %s", resp.json())
        except httpx.ConnectError:
            logger.error("Cannot connect to service at %s. Is it running?", service_url)
            logger.error("Start it with: uv run python run_terminal_service.py")
            return EXIT_CONNECTION_ERROR

        status = await fetch_json(client, "/session/status")
        if status["view"] in OFFLINE_VIEWS:
            if not reboot:
                logger.error("System is offline. Re-run with --reboot to boot it again.")
                return EXIT_SYSTEM_OFFLINE
            resp = await client.post("/reboot")
            if resp.status_code != 200:
                logger.error("Reboot failed: %s", resp.text)
                return EXIT_SYSTEM_OFFLINE
            status = resp.json()

        if status["view"] == "boot":
            await play_boot(client)
            await pass_gate(client)

        return await run_repl(client)


def main(service_url: str | None = None, reboot: bool = False) -> int:
    """
    Main entry point for the console client.

    Args:
        service_url: URL of the terminal service (defaults to env var or localhost:8770).
        reboot: Reboot an offline system first.

    Returns:
        Exit code indicating success or failure.
    """
    resolved_url = service_url or os.environ.get("SERVICE_URL", DEFAULT_SERVICE_URL)
    logger.info("Target: %s", resolved_url)

    try:
        return asyncio.run(run_client(resolved_url, reboot))
    except KeyboardInterrupt:
        logger.info("\nClient interrupted")
        return EXIT_INTERRUPTED


def cli() -> None:
    """Command-line interface entry point with argument parsing."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Connect to a SwitchUp terminal service.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables:
    SERVICE_URL      Terminal service URL (default: http://127.0.0.1:8770)
        """,
    )
    parser.add_argument(
        "--service-url",
        type=str,
        default=None,
        help=f"Terminal service URL (default: {DEFAULT_SERVICE_URL})",
    )
    parser.add_argument(
        "--reboot",
        action="store_true",
        help="Reboot the system first if it is offline",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    sys.exit(main(service_url=args.service_url, reboot=args.reboot))


if __name__ == "__main__":
    cli()
