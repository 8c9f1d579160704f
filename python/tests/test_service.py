"""
FastAPI endpoint tests for the SwitchUp Terminal Service.

Tests the API endpoints using httpx AsyncClient with proper lifespan
management via asgi-lifespan. The engine spec fixture uses millisecond
pacing so timed reveals complete within a short poll.

Last Grunted: 10/19/2026
"""

from __future__ import annotations

import asyncio
import dataclasses
import json
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

import pytest
import pytest_asyncio
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient


TEST_ENGINE_SPEC_PATH = Path(__file__).resolve().parent / "fixtures" / "instant_engine.json"
os.environ.setdefault("ENGINE_SPEC_PATH", str(TEST_ENGINE_SPEC_PATH))


# =============================================================================
# Helpers
# =============================================================================


@asynccontextmanager
async def running_service() -> AsyncIterator[AsyncClient]:
    """Run the app lifespan and yield a client bound to it."""
    from terminal_service import app

    async with LifespanManager(app) as manager:
        transport = ASGITransport(app=manager.app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac


async def wait_for(
    client: AsyncClient,
    predicate,
    path: str = "/session/status",
    timeout: float = 3.0,
) -> dict[str, Any]:
    """Poll ``path`` until ``predicate(json)`` holds."""
    deadline = asyncio.get_running_loop().time() + timeout
    while True:
        data = (await client.get(path)).json()
        if predicate(data):
            return data
        if asyncio.get_running_loop().time() > deadline:
            raise AssertionError(f"Timed out waiting on {path}: {data}")
        await asyncio.sleep(0.01)


async def unlock(client: AsyncClient) -> None:
    """Wait for the password prompt, submit the pass-phrase, wait for the terminal."""
    await wait_for(client, lambda d: d["show_password_prompt"], path="/boot/lines")
    response = await client.post("/boot/password", json={"password": "SwitchMeUp"})
    assert response.json()["result"] == "granted"
    await wait_for(client, lambda d: d["view"] == "terminal")


# =============================================================================
# Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def client() -> AsyncIterator[AsyncClient]:
    """
    Create async test client with proper lifespan management.

    Each lifespan builds a fresh session with an in-memory flag store.
    """
    async with running_service() as ac:
        yield ac


@pytest_asyncio.fixture
async def terminal(client: AsyncClient) -> AsyncClient:
    """Client whose session is already past the boot gate."""
    await unlock(client)
    return client


# =============================================================================
# Health and Status Tests
# =============================================================================


class TestHealthEndpoint:
    """Tests for /health endpoint."""

    @pytest.mark.asyncio
    async def test_health_returns_healthy(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "SwitchUp Terminal Service"
        assert data["engine_id"] == "switchup-test"
        assert data["view"] == "boot"
        assert data["timestamp"].endswith("Z")


class TestSessionStatus:
    """Tests for /session/status."""

    @pytest.mark.asyncio
    async def test_initial_status(self, client: AsyncClient) -> None:
        data = (await client.get("/session/status")).json()

        assert data["view"] == "boot"
        assert data["quiz_active"] is False
        assert data["shutdown_phase"] == 0
        assert data["is_shutdown"] is False
        assert data["visits"]["count"] == 1


# =============================================================================
# Boot Gate Tests
# =============================================================================


class TestBootGate:
    """Tests for /boot/lines and /boot/password."""

    @pytest.mark.asyncio
    async def test_boot_lines_then_prompt(self, client: AsyncClient) -> None:
        data = await wait_for(client, lambda d: d["show_password_prompt"], path="/boot/lines")

        assert len(data["lines"]) == 8
        assert data["lines"][0]["content"] == "INITIALIZING SWITCHUP_KERNEL..."
        assert data["prompt"] == ["> AUTHENTICATION REQUIRED", "PASSWORD:"]

    @pytest.mark.asyncio
    async def test_wrong_password_denied(self, client: AsyncClient) -> None:
        await wait_for(client, lambda d: d["show_password_prompt"], path="/boot/lines")
        response = await client.post("/boot/password", json={"password": "switchmeup"})

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is False
        assert data["result"] == "denied"
        assert data["view"] == "boot"

    @pytest.mark.asyncio
    async def test_correct_password_unlocks(self, client: AsyncClient) -> None:
        await unlock(client)

        boot = (await client.get("/boot/lines")).json()
        contents = [line["content"] for line in boot["lines"]]
        assert contents[-2] == "[PASSWORD] **********"
        assert contents[-1] == "ACCESS GRANTED."

    @pytest.mark.asyncio
    async def test_password_after_grant_conflicts(self, terminal: AsyncClient) -> None:
        response = await terminal.post("/boot/password", json={"password": "SwitchMeUp"})

        assert response.status_code == 409
        assert response.json()["error_code"] == "BOOT_ALREADY_GRANTED"

    @pytest.mark.asyncio
    async def test_submit_before_unlock_is_locked(self, client: AsyncClient) -> None:
        response = await client.post("/terminal/submit", json={"input": "help"})

        assert response.status_code == 409
        assert response.json()["error_code"] == "TERMINAL_LOCKED"


# =============================================================================
# Terminal Tests
# =============================================================================


class TestTerminal:
    """Tests for /terminal/submit and /transcript."""

    @pytest.mark.asyncio
    async def test_welcome_entry(self, terminal: AsyncClient) -> None:
        data = (await terminal.get("/transcript")).json()
        assert data["entries"][0]["kind"] == "system"
        assert data["entries"][0]["content"] == "Welcome, Architect of the Future."

    @pytest.mark.asyncio
    async def test_help_returns_input_and_output(self, terminal: AsyncClient) -> None:
        response = await terminal.post("/terminal/submit", json={"input": "help"})

        assert response.status_code == 200
        data = response.json()
        assert data["accepted"] is True
        assert [entry["kind"] for entry in data["entries"]] == ["input", "output"]
        assert data["entries"][1]["content"].startswith("Available Commands:")

    @pytest.mark.asyncio
    async def test_blank_input_not_accepted(self, terminal: AsyncClient) -> None:
        data = (await terminal.post("/terminal/submit", json={"input": "   "})).json()
        assert data["accepted"] is False
        assert data["entries"] == []

    @pytest.mark.asyncio
    async def test_unknown_command(self, terminal: AsyncClient) -> None:
        data = (await terminal.post("/terminal/submit", json={"input": "rm -rf /"})).json()
        assert data["entries"][-1]["content"] == 'Command not found: rm -rf /. Try "help".'

    @pytest.mark.asyncio
    async def test_clear_resets_transcript(self, terminal: AsyncClient) -> None:
        await terminal.post("/terminal/submit", json={"input": "stack"})
        data = (await terminal.post("/terminal/submit", json={"input": "clear"})).json()

        assert data["entries"] == []
        assert data["generation"] == 1
        transcript = (await terminal.get("/transcript")).json()
        assert transcript["entries"] == []

    @pytest.mark.asyncio
    async def test_transcript_after(self, terminal: AsyncClient) -> None:
        before = (await terminal.get("/transcript")).json()["last_sequence"]
        await terminal.post("/terminal/submit", json={"input": "ls"})

        data = (await terminal.get("/transcript", params={"after": before})).json()
        assert [entry["content"] for entry in data["entries"]][0] == "ls"

    @pytest.mark.asyncio
    async def test_quiz_reveals_next_question(self, terminal: AsyncClient) -> None:
        data = (await terminal.post("/terminal/submit", json={"input": "culture"})).json()
        assert data["quiz_active"] is True
        assert "Q1: " in data["entries"][-1]["content"]

        data = (await terminal.post("/terminal/submit", json={"input": "b"})).json()
        after = data["entries"][-1]["sequence"]
        assert data["entries"][-1]["content"].startswith("MATCH.")

        revealed = await wait_for(
            terminal,
            lambda d: bool(d["entries"]),
            path=f"/transcript?after={after}",
        )
        assert revealed["entries"][0]["content"].startswith("Q2: ")

    @pytest.mark.asyncio
    async def test_quiz_exit_does_not_shut_down(self, terminal: AsyncClient) -> None:
        await terminal.post("/terminal/submit", json={"input": "quiz"})
        data = (await terminal.post("/terminal/submit", json={"input": "exit"})).json()

        assert data["quiz_active"] is False
        assert data["entries"][-1]["content"] == "Quiz terminated."
        await asyncio.sleep(0.2)
        status = (await terminal.get("/session/status")).json()
        assert status["view"] == "terminal"


# =============================================================================
# Power Tests
# =============================================================================


class TestPower:
    """Tests for exit, /shutdown and /reboot."""

    @pytest.mark.asyncio
    async def test_exit_goes_offline(self, terminal: AsyncClient) -> None:
        data = (await terminal.post("/terminal/submit", json={"input": "exit"})).json()
        assert data["entries"][-1]["content"].startswith("INITIATING SHUTDOWN SEQUENCE...")

        status = await wait_for(terminal, lambda d: d["view"] == "offline")
        assert status["shutdown_phase"] == 7
        assert status["is_shutdown"] is True

        response = await terminal.post("/terminal/submit", json={"input": "help"})
        assert response.status_code == 409
        assert response.json()["error_code"] == "SYSTEM_OFFLINE"

    @pytest.mark.asyncio
    async def test_exit_pending_until_shutdown(self, terminal: AsyncClient) -> None:
        await terminal.post("/terminal/submit", json={"input": "exit"})

        status = (await terminal.get("/session/status")).json()
        assert status["view"] == "terminal"
        assert status["exit_pending"] is True

        status = await wait_for(terminal, lambda d: not d["exit_pending"])
        assert status["view"] in ("shutdown", "offline")

    @pytest.mark.asyncio
    async def test_shutdown_endpoint_and_repeat(self, terminal: AsyncClient) -> None:
        response = await terminal.post("/shutdown")
        assert response.status_code == 200
        assert response.json()["is_shutdown"] is True

        repeat = await terminal.post("/shutdown")
        assert repeat.status_code == 409

    @pytest.mark.asyncio
    async def test_reboot_online_conflicts(self, terminal: AsyncClient) -> None:
        response = await terminal.post("/reboot")
        assert response.status_code == 409
        assert response.json()["error_code"] == "SYSTEM_ONLINE"

    @pytest.mark.asyncio
    async def test_reboot_after_shutdown(self, terminal: AsyncClient) -> None:
        await terminal.post("/shutdown")
        await wait_for(terminal, lambda d: d["view"] == "offline")

        response = await terminal.post("/reboot")
        assert response.status_code == 200
        data = response.json()
        assert data["view"] == "boot"
        assert data["is_shutdown"] is False

        await unlock(terminal)
        transcript = (await terminal.get("/transcript")).json()
        assert [entry["content"] for entry in transcript["entries"]] == [
            "Welcome, Architect of the Future."
        ]

    @pytest.mark.asyncio
    async def test_flag_file_survives_restart(self, tmp_path: Path, monkeypatch) -> None:
        import terminal_service

        flags_file = tmp_path / "flags.json"
        monkeypatch.setattr(
            terminal_service,
            "RUNTIME_CONFIG",
            dataclasses.replace(terminal_service.RUNTIME_CONFIG, flags_file=flags_file),
        )

        async with running_service() as first:
            await first.post("/shutdown")
        assert flags_file.exists()

        async with running_service() as second:
            status = (await second.get("/session/status")).json()
            assert status["view"] == "offline"
            assert status["visits"]["count"] == 2


# =============================================================================
# Listing, Logs and Stats Tests
# =============================================================================


class TestListings:
    """Tests for /commands, /logs and /stats."""

    @pytest.mark.asyncio
    async def test_commands_hide_hidden_by_default(self, client: AsyncClient) -> None:
        data = (await client.get("/commands")).json()
        names = [command["name"] for command in data["commands"]]

        assert "stack" in names
        assert "konami" not in names
        assert data["hidden_count"] >= 6

        everything = (await client.get("/commands", params={"include_hidden": True})).json()
        assert "konami" in [command["name"] for command in everything["commands"]]

    @pytest.mark.asyncio
    async def test_logs_run_after_unlock(self, terminal: AsyncClient) -> None:
        data = await wait_for(terminal, lambda d: len(d["entries"]) >= 2, path="/logs")

        assert data["running"] is True
        assert len(data["entries"]) <= 5
        assert {"sequence", "level", "message", "time"} <= set(data["entries"][0])

    @pytest.mark.asyncio
    async def test_stats_count_activity(self, client: AsyncClient) -> None:
        await wait_for(client, lambda d: d["show_password_prompt"], path="/boot/lines")
        await client.post("/boot/password", json={"password": "nope"})
        await client.post("/boot/password", json={"password": "SwitchMeUp"})
        await wait_for(client, lambda d: d["view"] == "terminal")
        await client.post("/terminal/submit", json={"input": "frobnicate"})

        data = (await client.get("/stats")).json()
        assert data["stats"]["password_attempts"] == 2
        assert data["stats"]["password_failures"] == 1
        assert data["stats"]["submissions"] == 1
        assert data["interpreter"]["not_found"] == 1
        assert data["engine_id"] == "switchup-test"

    @pytest.mark.asyncio
    async def test_transcript_archive(self, tmp_path: Path, monkeypatch) -> None:
        import terminal_service

        archive = tmp_path / "transcript.log"
        monkeypatch.setattr(
            terminal_service,
            "RUNTIME_CONFIG",
            dataclasses.replace(terminal_service.RUNTIME_CONFIG, transcript_file=archive),
        )

        async with running_service() as ac:
            await unlock(ac)
            await ac.post("/terminal/submit", json={"input": "hire me"})
            await wait_for(ac, lambda d: d["stats"]["archived_entries"] >= 3, path="/stats")

        text = archive.read_text(encoding="utf-8")
        assert "SYSTEM: Welcome, Architect of the Future." in text
        assert "INPUT: hire me" in text

    @pytest.mark.asyncio
    async def test_reboot_welcome_is_archived(self, tmp_path: Path, monkeypatch) -> None:
        import terminal_service

        archive = tmp_path / "transcript.log"
        monkeypatch.setattr(
            terminal_service,
            "RUNTIME_CONFIG",
            dataclasses.replace(terminal_service.RUNTIME_CONFIG, transcript_file=archive),
        )

        async with running_service() as ac:
            await ac.post("/shutdown")
            await wait_for(ac, lambda d: d["view"] == "offline")
            await ac.post("/reboot")
            await wait_for(ac, lambda d: d["stats"]["archived_entries"] >= 2, path="/stats")

        text = archive.read_text(encoding="utf-8")
        assert text.count("SYSTEM: Welcome, Architect of the Future.") == 2

    @pytest.mark.asyncio
    async def test_command_lookup_by_alias(self, client: AsyncClient) -> None:
        response = await client.get("/commands/QUIZ")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "culture"
        assert data["category"] == "action"
        assert "quiz" in data["aliases"]

    @pytest.mark.asyncio
    async def test_command_lookup_unknown(self, client: AsyncClient) -> None:
        response = await client.get("/commands/frobnicate")

        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "COMMAND_NOT_FOUND"
        assert "Unknown command 'frobnicate'" in data["error"]

    @pytest.mark.asyncio
    async def test_log_stream_ends_after_limit(self, terminal: AsyncClient) -> None:
        response = await terminal.get("/logs/stream", params={"limit": 3})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/x-ndjson")
        entries = [json.loads(line) for line in response.text.splitlines()]
        assert len(entries) == 3
        sequences = [entry["sequence"] for entry in entries]
        assert sequences == sorted(sequences)

        stats = (await terminal.get("/stats")).json()
        assert stats["live_log_subscribers"] == 0


# =============================================================================
# Console Client Tests
# =============================================================================


class TestConsoleClient:
    """Tests for the console client's read-eval-print loop."""

    @pytest.mark.asyncio
    async def test_exit_plays_shutdown_without_new_prompt(
        self, terminal: AsyncClient, monkeypatch, capsys
    ) -> None:
        import terminal_client
        from terminal_engine.content import SHUTDOWN_LINES

        prompts: list[str] = []

        def fake_input(prompt: str = "") -> str:
            prompts.append(prompt)
            if len(prompts) > 1:
                raise EOFError
            return "exit"

        monkeypatch.setattr("builtins.input", fake_input)
        monkeypatch.setattr(terminal_client, "SETTLE_SECONDS", 0.0)
        monkeypatch.setattr(terminal_client, "POLL_INTERVAL", 0.01)

        exit_code = await terminal_client.run_repl(terminal)

        assert exit_code == terminal_client.EXIT_SUCCESS
        assert len(prompts) == 1
        out = capsys.readouterr().out
        assert SHUTDOWN_LINES[0] in out
        assert out.rstrip().endswith("SYSTEM OFFLINE")
