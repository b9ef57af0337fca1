"""
In-process smoke test for the HTTP transport; no network, Hostinger is mocked.
Usage:
  python smoke_test.py
"""
import httpx
from fastapi.testclient import TestClient

from hostinger_mcp.__main__ import build_protocol
from hostinger_mcp.catalog import ToolName
from hostinger_mcp.config import Config
from hostinger_mcp.infrastructure.hostinger_client import HostingerClient
from hostinger_mcp.main import create_app


def _fake_hostinger(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/v1/domains":
        return httpx.Response(200, json={"data": [{"domain": "example.com"}]})
    return httpx.Response(404, text="not found")


cfg = Config.from_env({"HOSTINGER_API_KEY": "smoke-token", "MCP_API_KEY": "smoke-key"})
api = HostingerClient(cfg.base_url, cfg.api_key, transport=httpx.MockTransport(_fake_hostinger))
client = TestClient(create_app(build_protocol(cfg, api), cfg, client=api))
AUTH = {"authorization": "Bearer smoke-key"}


def must(cond: bool, msg: str = "assertion failed"):
    if not cond:
        raise SystemExit(f"SMOKE FAIL: {msg}")


def main():
    # 1) health is open
    r = client.get("/health")
    must(r.status_code == 200, f"/health expected 200, got {r.status_code}")
    must(r.json().get("status") == "healthy", "health status not healthy")

    # 2) /mcp without key should 401
    r = client.post("/mcp", json={"jsonrpc": "2.0", "id": 1, "method": "ping"})
    must(r.status_code == 401, f"/mcp without key expected 401, got {r.status_code}")

    # 3) initialize
    r = client.post("/mcp", headers=AUTH, json={"jsonrpc": "2.0", "id": 1, "method": "initialize"})
    must(r.status_code == 200, f"/mcp initialize expected 200, got {r.status_code}")
    must(r.json().get("result", {}).get("serverInfo", {}).get("name"), "initialize missing server name")

    # 4) tools/list
    r = client.post("/mcp", headers=AUTH, json={"jsonrpc": "2.0", "id": 2, "method": "tools/list"})
    must(r.status_code == 200, "/mcp tools/list expected 200")
    must(len(r.json().get("result", {}).get("tools", [])) == len(ToolName), "tools/list count mismatch")

    # 5) tools/call round trip
    payload = {"jsonrpc": "2.0", "id": 3, "method": "tools/call", "params": {"name": "list_domains", "arguments": {}}}
    r = client.post("/mcp", headers=AUTH, json=payload)
    text = r.json()["result"]["content"][0]["text"]
    must(text.startswith("Domains: "), f"unexpected tool text: {text}")

    # 6) upstream failure is a tool result, not a protocol error
    payload = {"jsonrpc": "2.0", "id": 4, "method": "tools/call", "params": {"name": "get_vps", "arguments": {"vps_id": "x"}}}
    r = client.post("/mcp", headers=AUTH, json=payload)
    must(r.status_code == 200, "/mcp tools/call failure expected 200")
    must(r.json()["result"]["content"][0]["text"].startswith("Error: API request failed: HTTP 404"), "error text mismatch")

    # 7) unknown method → -32601
    r = client.post("/mcp", headers=AUTH, json={"jsonrpc": "2.0", "id": 5, "method": "nonexistent"})
    must(r.json().get("error", {}).get("code") == -32601, "unknown method code mismatch")

    print("SMOKE OK")


if __name__ == "__main__":
    main()
