"""Execution audit MCP server."""

import os

# When run as main module, honor PROJECT_DIR so the root walk and the
# CLAUDE_PROJECT_DIR fallback resolve against the intended project.
if __name__ == "__main__" and os.environ.get("PROJECT_DIR"):
    os.chdir(os.environ["PROJECT_DIR"])

import logging

from fastmcp import FastMCP

from .errors import PersistenceError
from .logger import ExecutionLogger

mcp = FastMCP("ESMC Execution Audit")

audit_logger = ExecutionLogger()


@mcp.tool()
async def capture_execution_log(context: dict) -> dict:
    """Write an audit record for one orchestrated run.

    The context must carry ``userPrompt``; every other section is optional
    and defaulted in the written record.
    """
    result = await audit_logger.capture_execution_log(context)
    return result.to_dict()


@mcp.tool()
def list_execution_logs(limit: int = 20) -> dict:
    """List audit log filenames, newest first."""
    return {"logs": audit_logger.list_execution_logs(limit)}


@mcp.tool()
async def get_execution_log(filename: str) -> dict:
    """Read a single audit log by filename."""
    try:
        return await audit_logger.read_execution_log(filename)
    except PersistenceError as exc:
        return {"error": str(exc)}


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(name)s] %(levelname)s: %(message)s")
    mcp.run(transport="sse", port=int(os.environ.get("PORT", "3104")))
