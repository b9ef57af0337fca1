 # dispatcher.py
 # - list_tools: catalog listing (tools/list)
 # - call_tool: resolve -> validate (jsonschema) -> handler -> ToolResult
 # - any tool failure is returned as "Error: ..." text, never raised

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from jsonschema import Draft7Validator

from hostinger_mcp.catalog import Catalog, ToolName
from hostinger_mcp.errors import CatalogBindingError, InvalidArguments, UnknownTool
from hostinger_mcp.handlers import Handler, HostingerAPI
from hostinger_mcp.schemas.mcp import ToolResult

logger = logging.getLogger("mcp.tools")


def validate_params_by_schema(params: Dict[str, Any], schema: Dict[str, Any]) -> Optional[str]:
    """Return the first schema violation message, or None."""
    errors = sorted(Draft7Validator(schema).iter_errors(params), key=lambda e: list(e.path))
    if not errors:
        return None
    return errors[0].message


class Dispatcher:
    """Shared by every transport; holds no per-call state."""

    def __init__(self, catalog: Catalog, handlers: Mapping[ToolName, Handler], api: HostingerAPI):
        listed = set(catalog.names())
        bound = {name.value for name in handlers}
        if listed != bound:
            missing = sorted(listed - bound)
            extra = sorted(bound - listed)
            raise CatalogBindingError(f"catalog/handler mismatch: unbound={missing} unlisted={extra}")
        self.catalog = catalog
        self.api = api
        self._handlers: Dict[str, Handler] = {name.value: fn for name, fn in handlers.items()}
        self._schemas: Dict[str, Dict[str, Any]] = {t.name: t.json_schema() for t in catalog}

    def list_tools(self) -> Dict[str, Any]:
        return {"tools": [t.to_wire() for t in self.catalog.list()]}

    async def call_tool(self, name: Any, arguments: Optional[Dict[str, Any]] = None) -> ToolResult:
        arguments = arguments or {}
        try:
            tool = ToolName.parse(name)
            if tool is None or tool.value not in self.catalog:
                raise UnknownTool(name)
            err = validate_params_by_schema(arguments, self._schemas[tool.value])
            if err:
                raise InvalidArguments(err)
            logger.debug(f"tool.call name={tool.value} args_keys={list(arguments.keys())}")
            return await self._handlers[tool.value](self.api, arguments)
        except Exception as e:
            logger.warning(f"tool.failed name={name} error={e}")
            return ToolResult.error(e)
