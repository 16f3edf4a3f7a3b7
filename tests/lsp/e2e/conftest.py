"""Fixtures for stdio tests against a real server process."""

from __future__ import annotations

import asyncio
import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from tests.lsp.e2e.lsp_client import LspTestClient

REPO_ROOT = Path(__file__).resolve().parents[3]


@pytest.fixture
async def lsp_server_process() -> AsyncGenerator[asyncio.subprocess.Process, None]:
    """Start the server as a subprocess speaking LSP over stdio."""
    env = dict(os.environ)
    python_path = [str(REPO_ROOT / "src"), str(REPO_ROOT)]
    if env.get("PYTHONPATH"):
        python_path.append(env["PYTHONPATH"])
    env["PYTHONPATH"] = os.pathsep.join(python_path)

    process = await asyncio.create_subprocess_exec(
        sys.executable,
        "-m",
        "tests.lsp.e2e.server_entry",
        cwd=REPO_ROOT,
        env=env,
        stdin=asyncio.subprocess.PIPE,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.DEVNULL,
    )

    yield process

    if process.returncode is None:
        process.terminate()
        try:
            await asyncio.wait_for(process.wait(), timeout=5.0)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()


@pytest.fixture
async def lsp_client(
    lsp_server_process: asyncio.subprocess.Process,
) -> AsyncGenerator[LspTestClient, None]:
    """Client connected to the server's stdin and stdout."""
    assert lsp_server_process.stdin is not None
    assert lsp_server_process.stdout is not None

    yield LspTestClient(
        reader=lsp_server_process.stdout,
        writer=lsp_server_process.stdin,
    )
