"""Smoke tests for the server over stdio."""

from __future__ import annotations

import pytest

from tests.lsp.e2e.lsp_client import LspTestClient

_URI = "file:///workspace/config.alloy"


def _labels(response: dict) -> list[str]:
    return [item["label"] for item in response["result"]["items"]]


@pytest.mark.e2e
class TestStdioE2E:
    """End-to-end tests for LSP server communication."""

    async def test_initialize_shutdown(self, lsp_client: LspTestClient) -> None:
        """Server advertises completion with its trigger characters."""
        response = await lsp_client.initialize()

        capabilities = response["result"]["capabilities"]
        provider = capabilities["completionProvider"]
        assert set(provider["triggerCharacters"]) >= {".", "{", "="}
        assert response["result"]["serverInfo"]["name"] == "alloy-lsp"

        await lsp_client.shutdown_exit()

    async def test_top_level_completion(self, lsp_client: LspTestClient) -> None:
        """Empty document offers component snippets."""
        await lsp_client.initialize()
        await lsp_client.did_open(uri=_URI, text="")

        response = await lsp_client.completion(uri=_URI, line=0, character=0)

        labels = _labels(response)
        assert "prometheus.scrape" in labels
        assert "loki.write" in labels
        first = response["result"]["items"][0]
        assert first["insertTextFormat"] == 2  # Snippet

        await lsp_client.shutdown_exit()

    async def test_nested_block_completion(self, lsp_client: LspTestClient) -> None:
        """Completions inside a nested block come from that block."""
        await lsp_client.initialize()
        text = 'loki.write "default" {\n  endpoint {\n    \n  }\n}\n'
        await lsp_client.did_open(uri=_URI, text=text)

        response = await lsp_client.completion(uri=_URI, line=2, character=4)

        assert _labels(response)[:2] == ["url", "bearer_token"]

        await lsp_client.shutdown_exit()

    async def test_completion_follows_edits(self, lsp_client: LspTestClient) -> None:
        """Requests see the latest document version."""
        await lsp_client.initialize()
        await lsp_client.did_open(uri=_URI, text="")
        await lsp_client.did_change_full(
            uri=_URI, text='otelcol.exporter.otlp "out" {\n  \n}\n', version=2
        )

        response = await lsp_client.completion(uri=_URI, line=1, character=2)

        assert _labels(response) == ["client"]

        await lsp_client.shutdown_exit()

    async def test_unknown_document_returns_empty_list(
        self, lsp_client: LspTestClient
    ) -> None:
        """Requests for unopened documents do not fail the session."""
        await lsp_client.initialize()

        response = await lsp_client.completion(
            uri="file:///workspace/missing.alloy", line=5, character=3
        )

        assert "error" not in response
        assert response["result"]["items"] == []

        await lsp_client.shutdown_exit()
