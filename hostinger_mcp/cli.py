#!/usr/bin/env python3
"""
Operator CLI for a running Hostinger MCP server (HTTP transport).
Usage examples:
    python -m hostinger_mcp.cli tools list
    python -m hostinger_mcp.cli tools call get_vps --args '{"vps_id": "123"}'
    python -m hostinger_mcp.cli health
    python -m hostinger_mcp.cli manifest --output .mcp.json   (offline)
Environment:
  MCP_URL     (default: http://localhost:${PORT or 3000})
  MCP_API_KEY (static bearer, when the server requires one)
"""
import os
import sys
import json
import argparse
import itertools
from typing import Any, Dict, Optional

import httpx

from hostinger_mcp.catalog import default_catalog

_ids = itertools.count(1)


def _base_url() -> str:
    url = os.getenv("MCP_URL")
    if url:
        return url.rstrip("/")
    port = os.getenv("PORT", "3000")
    return f"http://localhost:{port}"


def _headers() -> dict:
    headers = {"content-type": "application/json"}
    key = os.getenv("MCP_API_KEY")
    if key:
        headers["authorization"] = f"Bearer {key}"
    return headers


def _client() -> httpx.Client:
    return httpx.Client(base_url=_base_url(), timeout=20)


def _print(data: Any) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


class RpcError(Exception):
    def __init__(self, error: Dict[str, Any]):
        self.error = error
        super().__init__(f"JSON-RPC error {error.get('code')}: {error.get('message')}")


def _rpc(method: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"jsonrpc": "2.0", "id": next(_ids), "method": method}
    if params is not None:
        body["params"] = params
    with _client() as c:
        r = c.post("/mcp", headers=_headers(), json=body)
    try:
        envelope = r.json()
    except ValueError:
        envelope = {}
    if isinstance(envelope, dict) and "error" in envelope:
        raise RpcError(envelope["error"])
    r.raise_for_status()
    return envelope.get("result", {})


def cmd_tools_list(args: argparse.Namespace) -> None:
    result = _rpc("tools/list")
    if args.names:
        for t in result.get("tools", []):
            print(t.get("name"))
        return
    _print(result)


def cmd_tools_call(args: argparse.Namespace) -> None:
    try:
        arguments = json.loads(args.args) if args.args else {}
    except Exception as e:
        raise SystemExit(f"Invalid --args JSON: {e}")
    if not isinstance(arguments, dict):
        raise SystemExit("--args must be a JSON object")
    result = _rpc("tools/call", {"name": args.name, "arguments": arguments})
    for block in result.get("content", []):
        if block.get("type") == "text":
            print(block.get("text", ""))


def cmd_health(args: argparse.Namespace) -> None:
    with _client() as c:
        r = c.get("/health")
        r.raise_for_status()
        _print(r.json())


def cmd_manifest(args: argparse.Namespace) -> None:
    # MCP tool manifest generated from the catalog; no server needed
    manifest = {"tools": [t.to_wire() for t in default_catalog().list()]}
    with open(args.output, "w", encoding="utf-8") as f:
        json.dump(manifest, f, ensure_ascii=False, indent=2)
    print(f"{args.output} manifest generated.")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="hostinger-mcp-cli", description="Hostinger MCP Server CLI")
    sub = p.add_subparsers(dest="cmd")

    g_tools = sub.add_parser("tools", help="List or call tools")
    sub_tools = g_tools.add_subparsers(dest="action")

    p_list = sub_tools.add_parser("list", help="List tools (tools/list)")
    p_list.add_argument("--names", action="store_true", help="Print tool names only")
    p_list.set_defaults(func=cmd_tools_list)

    p_call = sub_tools.add_parser("call", help="Call a tool (tools/call)")
    p_call.add_argument("name")
    p_call.add_argument("--args", required=False, help="Tool arguments as a JSON object")
    p_call.set_defaults(func=cmd_tools_call)

    p_health = sub.add_parser("health", help="Server liveness")
    p_health.set_defaults(func=cmd_health)

    p_man = sub.add_parser("manifest", help="Write the tool manifest (.mcp.json)")
    p_man.add_argument("--output", default=".mcp.json")
    p_man.set_defaults(func=cmd_manifest)

    args = p.parse_args(argv)
    if not getattr(args, "func", None):
        p.print_help()
        return 1
    try:
        args.func(args)
        return 0
    except RpcError as e:
        print(str(e), file=sys.stderr)
        return 2
    except httpx.HTTPStatusError as e:
        print(f"HTTP error: {e.response.status_code} {e.response.text}", file=sys.stderr)
        return 2
    except httpx.HTTPError as e:
        print(f"Connection error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
