import json

import httpx
import pytest

from hostinger_mcp import cli
from hostinger_mcp.catalog import ToolName


@pytest.fixture
def server(monkeypatch):
    """Routes the CLI's HTTP client to an in-process mock of the MCP endpoint."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/health":
            return httpx.Response(200, json={"status": "healthy"})
        body = json.loads(request.content)
        seen.append((dict(request.headers), body))
        if body["method"] == "tools/list":
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"],
                                             "result": {"tools": [{"name": "list_vps"}, {"name": "get_vps"}]}})
        if body["method"] == "tools/call":
            text = f"called {body['params']['name']} with {json.dumps(body['params']['arguments'])}"
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"],
                                             "result": {"content": [{"type": "text", "text": text}]}})
        return httpx.Response(400, json={"jsonrpc": "2.0", "id": body["id"],
                                         "error": {"code": -32601, "message": "Method not found"}})

    monkeypatch.setattr(cli, "_client", lambda: httpx.Client(base_url="http://mcp.test",
                                                             transport=httpx.MockTransport(handler)))
    return seen


def test_tools_list_names(server, capsys):
    assert cli.main(["tools", "list", "--names"]) == 0
    assert capsys.readouterr().out.split() == ["list_vps", "get_vps"]
    assert server[0][1]["jsonrpc"] == "2.0"


def test_tools_call_prints_text(server, capsys):
    assert cli.main(["tools", "call", "get_vps", "--args", '{"vps_id": "1"}']) == 0
    assert capsys.readouterr().out.strip() == 'called get_vps with {"vps_id": "1"}'


def test_tools_call_rejects_non_object_args(server):
    with pytest.raises(SystemExit):
        cli.main(["tools", "call", "get_vps", "--args", "[1]"])


def test_bearer_header_from_env(server, monkeypatch):
    monkeypatch.setenv("MCP_API_KEY", "s3cret")
    cli.main(["tools", "list"])
    assert server[0][0]["authorization"] == "Bearer s3cret"


def test_rpc_error_exit_code(monkeypatch, capsys):
    def handler(request):
        return httpx.Response(400, json={"jsonrpc": "2.0", "id": 1,
                                         "error": {"code": -32601, "message": "Method not found"}})

    monkeypatch.setattr(cli, "_client", lambda: httpx.Client(base_url="http://mcp.test",
                                                             transport=httpx.MockTransport(handler)))
    assert cli.main(["tools", "list"]) == 2
    assert "-32601" in capsys.readouterr().err


def test_connection_error_exit_code(monkeypatch):
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    monkeypatch.setattr(cli, "_client", lambda: httpx.Client(base_url="http://mcp.test",
                                                             transport=httpx.MockTransport(handler)))
    assert cli.main(["health"]) == 2


def test_health(server, capsys):
    assert cli.main(["health"]) == 0
    assert json.loads(capsys.readouterr().out) == {"status": "healthy"}


def test_manifest_is_written_offline(tmp_path, capsys):
    out = tmp_path / "manifest.json"
    assert cli.main(["manifest", "--output", str(out)]) == 0
    manifest = json.loads(out.read_text(encoding="utf-8"))
    assert len(manifest["tools"]) == len(ToolName)
    assert manifest["tools"][0]["name"] == "list_vps"
    assert "manifest generated" in capsys.readouterr().out


def test_no_command_prints_help():
    assert cli.main([]) == 1


def test_base_url(monkeypatch):
    monkeypatch.delenv("MCP_URL", raising=False)
    monkeypatch.setenv("PORT", "8080")
    assert cli._base_url() == "http://localhost:8080"
    monkeypatch.setenv("MCP_URL", "https://mcp.example/")
    assert cli._base_url() == "https://mcp.example"
