import asyncio
import json

from hostinger_mcp.catalog import ToolName, default_catalog
from hostinger_mcp.dispatcher import Dispatcher
from hostinger_mcp.handlers import HANDLERS
from hostinger_mcp.protocol import McpProtocol
from hostinger_mcp.stdio import StdioServer
from tests.conftest import CollectingWriter, FakeHostingerClient


def _reader(*lines: bytes) -> asyncio.StreamReader:
    reader = asyncio.StreamReader()
    for line in lines:
        reader.feed_data(line)
    reader.feed_eof()
    return reader


def _responses(writer: CollectingWriter) -> list:
    out = []
    for chunk in writer.lines:
        assert chunk.endswith(b"\n")
        assert chunk.count(b"\n") == 1
        out.append(json.loads(chunk))
    return out


def _req(id_, method, params=None) -> bytes:
    body = {"jsonrpc": "2.0", "id": id_, "method": method}
    if params is not None:
        body["params"] = params
    return (json.dumps(body) + "\n").encode()


async def test_one_response_per_request(protocol):
    writer = CollectingWriter()
    await StdioServer(protocol).serve(
        _reader(_req(1, "tools/list"), b"\n", _req(2, "tools/call", {"name": "list_domains", "arguments": {}})),
        writer,
    )
    responses = _responses(writer)
    assert sorted(r["id"] for r in responses) == [1, 2]
    by_id = {r["id"]: r for r in responses}
    assert len(by_id[1]["result"]["tools"]) == len(ToolName)
    assert by_id[2]["result"]["content"][0]["text"].startswith("Domains: ")


async def test_malformed_line_does_not_close_channel(protocol):
    writer = CollectingWriter()
    await StdioServer(protocol).serve(_reader(b"{not json\n", _req(5, "ping")), writer)
    responses = _responses(writer)
    assert len(responses) == 2
    parse_error = next(r for r in responses if r["id"] is None)
    assert parse_error["error"]["code"] == -32700
    assert next(r for r in responses if r["id"] == 5)["result"] == {}


async def test_protocol_errors_carry_request_id(protocol):
    writer = CollectingWriter()
    await StdioServer(protocol).serve(_reader(_req("x", "nonexistent")), writer)
    [resp] = _responses(writer)
    assert resp["id"] == "x"
    assert resp["error"]["code"] == -32601


async def test_last_line_without_newline_is_served(protocol):
    writer = CollectingWriter()
    await StdioServer(protocol).serve(_reader(_req(1, "ping").rstrip(b"\n")), writer)
    assert _responses(writer)[0]["id"] == 1


async def test_concurrent_calls_complete_out_of_order_with_matching_ids(cfg):
    api = FakeHostingerClient(
        responses={("GET", "/v1/vps/slow"): {"id": "slow"}, ("GET", "/v1/vps/fast"): {"id": "fast"}},
        delays={"slow": 0.2},
    )
    protocol = McpProtocol(Dispatcher(default_catalog(), HANDLERS, api), cfg)
    writer = CollectingWriter()
    await StdioServer(protocol).serve(
        _reader(
            _req(10, "tools/call", {"name": "get_vps", "arguments": {"vps_id": "slow"}}),
            _req(11, "tools/call", {"name": "get_vps", "arguments": {"vps_id": "fast"}}),
        ),
        writer,
    )
    responses = _responses(writer)
    assert [r["id"] for r in responses] == [11, 10]
    by_id = {r["id"]: r["result"]["content"][0]["text"] for r in responses}
    assert '"slow"' in by_id[10]
    assert '"fast"' in by_id[11]


async def test_overlong_line_split_across_reads_gets_one_parse_error(protocol):
    reader = asyncio.StreamReader(limit=64)
    writer = CollectingWriter()
    line = _req(1, "ping", {"pad": "x" * 200})
    task = asyncio.create_task(StdioServer(protocol).serve(reader, writer))

    reader.feed_data(line[:100])
    await asyncio.sleep(0.01)
    reader.feed_data(line[100:] + _req(2, "ping"))
    reader.feed_eof()
    await task

    responses = _responses(writer)
    assert len(responses) == 2
    assert [r["error"]["code"] for r in responses if "error" in r] == [-32700]
    assert next(r for r in responses if "result" in r)["id"] == 2


async def test_overlong_line_at_eof_gets_one_parse_error(protocol):
    reader = asyncio.StreamReader(limit=64)
    reader.feed_data(b"x" * 300)
    reader.feed_eof()
    writer = CollectingWriter()
    await StdioServer(protocol).serve(reader, writer)
    [resp] = _responses(writer)
    assert resp["error"]["code"] == -32700
