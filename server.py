"""
Sheet Data MCP Server

Serves the normalized partitions of one Google Sheet (normals, newbies,
leaders, filter pairs) through MCP tools, with refresh and statistics.
Fetches run in a worker thread so the blocking gspread call does not
stall the event loop. This module is the composition root: it builds
the client and service once and injects them into the tools.
"""
import asyncio
from typing import Any

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from config import SERVER_NAME
from core.sheet_data_service import SheetDataService
from core.snapshot import Snapshot
from lib.common import log, ok
from lib.errors import SheetDataError, error_response, internal_error
from lib.input_parser import coerce_str, resolve_sheet_context


def snapshot_payload(service: SheetDataService, snapshot: Snapshot) -> dict[str, Any]:
    """JSON data for a snapshot response."""
    return {
        "snapshot": snapshot.to_dict(),
        "statistics": service.get_data_statistics(snapshot),
    }


class SheetDataTools:
    """
    MCP tools bound to one SheetDataService.

    Every tool returns the {ok, op, data|error} response shape.
    """

    TOOL_NAMES = (
        "sheet_data_init",
        "sheet_data_refresh",
        "sheet_data_status",
        "sheet_data_snapshot",
        "sheet_data_stats",
        "tools_help",
    )

    def __init__(
        self,
        service: SheetDataService,
        default_spreadsheet_id: str | None = None,
        default_sheet_name: str | None = None,
    ) -> None:
        self.service = service
        self.default_spreadsheet_id = default_spreadsheet_id
        self.default_sheet_name = default_sheet_name

    def register(self, mcp: FastMCP) -> FastMCP:
        for name in self.TOOL_NAMES:
            mcp.add_tool(getattr(self, name))
        return mcp

    async def sheet_data_init(self, spreadsheet_id: Any = None, sheet_name: Any = None) -> dict:
        """Initialize the service and fetch all partitions in one batched read.

        Args:
        - spreadsheet_id: spreadsheet ID or URL (defaults to the configured one)
        - sheet_name: sheet to read (defaults to the configured one, e.g. "DB")

        Returns (example):
        {
          "ok": true,
          "op": "sheet_data.init",
          "data": {
            "snapshot": {"normals": ["alice"], "newbies": [], "leaders": [],
                         "filter_pairs": [["g1", "h1"]],
                         "metadata": {"fetched_at": "...", "spreadsheet_id": "...", "sheet_name": "DB"}},
            "statistics": {"total_items": 1, "total_pairs": 1, "counts": {...}}
          }
        }
        """
        spid, name = resolve_sheet_context(spreadsheet_id, sheet_name)
        result = await asyncio.to_thread(
            self.service.initialize_and_fetch,
            spid or self.default_spreadsheet_id,
            name or self.default_sheet_name,
        )
        if not result["ok"]:
            return result
        return ok(result["op"], snapshot_payload(self.service, result["data"]["snapshot"]))

    async def sheet_data_refresh(self, sheet_name: Any = None) -> dict:
        """Re-fetch all partitions using the initialized spreadsheet.

        Args:
        - sheet_name: sheet to read (defaults to the initialized sheet)

        Fails with NOT_INITIALIZED until sheet_data_init has succeeded once.
        """
        op = "sheet_data.refresh"
        name = coerce_str(sheet_name, ("sheet_name", "sheetName", "name")) or None
        try:
            snapshot = await asyncio.to_thread(self.service.fetch_default_data, name)
        except SheetDataError as e:
            return error_response(op, e)
        except Exception as e:
            log(f"{op} failed unexpectedly: {e!r}")
            return internal_error(op, str(e))
        return ok(op, snapshot_payload(self.service, snapshot))

    async def sheet_data_status(self) -> dict:
        """Initialization flag, active config, last fetch time, last error and statistics."""
        return ok("sheet_data.status", self.service.status())

    async def sheet_data_snapshot(self) -> dict:
        """Return the cached snapshot without fetching (empty before the first fetch)."""
        return ok("sheet_data.snapshot", snapshot_payload(self.service, self.service.snapshot))

    async def sheet_data_stats(self) -> dict:
        """Item/pair counts of the cached snapshot (statistics is null before the first fetch)."""
        return ok("sheet_data.stats", {"statistics": self.service.get_data_statistics()})

    async def tools_help(self) -> dict:
        """List available tools."""
        tools = []
        for name in self.TOOL_NAMES:
            doc = (getattr(self, name).__doc__ or "").strip()
            tools.append({"name": name, "description": doc.splitlines()[0] if doc else ""})
        return ok("tools.help", {"tools": tools})


def build_server(tools: SheetDataTools, allowed_hosts: list[str] | None = None) -> FastMCP:
    """Create the FastMCP server and register the tools on it."""
    transport_security = None
    if allowed_hosts:
        transport_security = TransportSecuritySettings(
            enable_dns_rebinding_protection=True,
            allowed_hosts=allowed_hosts,
        )
    mcp = FastMCP(SERVER_NAME, transport_security=transport_security)
    return tools.register(mcp)


def build_app(mcp: FastMCP):
    """ASGI app: /mcp for MCP, /healthz for health checks."""
    from contextlib import asynccontextmanager
    from starlette.applications import Starlette
    from starlette.routing import Route
    from starlette.responses import JSONResponse

    async def healthz(request):
        return JSONResponse({"status": "ok"})

    async def root(request):
        return JSONResponse(
            {"error": "Use /mcp for MCP endpoint or /healthz for health check"},
            status_code=406,
        )

    # Get MCP ASGI app
    mcp_app = mcp.streamable_http_app()

    @asynccontextmanager
    async def lifespan(app):
        async with mcp.session_manager.run():
            yield

    # Create Starlette app for non-MCP routes
    starlette_app = Starlette(
        routes=[
            Route("/", root),
            Route("/healthz", healthz),
        ],
        lifespan=lifespan,
    )

    # Combined ASGI app - MCP app handles /mcp path internally
    async def combined_app(scope, receive, send):
        path = scope.get("path", "/")
        if path.startswith("/mcp"):
            await mcp_app(scope, receive, send)
        else:
            await starlette_app(scope, receive, send)

    return combined_app


def main() -> None:
    import uvicorn

    from env_loader import get_allowed_hosts, get_port, get_sheet_name, get_spreadsheet_id
    from sheets_client import create_sheets_client

    service = SheetDataService(create_sheets_client())
    tools = SheetDataTools(
        service,
        default_spreadsheet_id=get_spreadsheet_id(),
        default_sheet_name=get_sheet_name(),
    )
    mcp = build_server(tools, allowed_hosts=get_allowed_hosts())

    port = get_port()
    log(f"Starting server on port {port}")
    uvicorn.run(build_app(mcp), host="0.0.0.0", port=port, lifespan="on")


if __name__ == "__main__":
    main()
