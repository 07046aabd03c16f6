"""Catalog browser JSON-lines bridge.

Usage: python -m catalogbrowser.server

Reads one JSON request per line from stdin and writes responses and view
notifications to stdout. Logging goes to stderr to keep the protocol clean.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Callable

from catalogbrowser.config.settings import Settings

from .handler import ServerHandler
from .protocol import Notification, Request, Response

log = logging.getLogger("catalogbrowser.server")


async def serve(
    reader: asyncio.StreamReader,
    handler: ServerHandler,
    write_line: Callable[[str], None],
) -> None:
    """Answer requests from ``reader`` until it reaches end of file.

    A failing request produces an error response; the loop keeps going.
    """
    while True:
        line = await reader.readline()
        if not line:
            break  # stdin closed

        line_str = line.decode("utf-8", errors="replace").strip()
        if not line_str:
            continue

        try:
            req = Request.from_line(line_str)
        except ValueError as e:
            # json.JSONDecodeError is a ValueError
            write_line(Response.invalid_line(e).to_json_line())
            continue

        try:
            result = await handler.dispatch({"method": req.method, "params": req.params})
            resp = Response(id=req.id, result=result)
        except (ValueError, RuntimeError) as e:
            log.error("%s failed: %s", req.method, e)
            resp = Response.failed(req, e)
        except Exception as e:
            log.exception("%s crashed", req.method)
            resp = Response.failed(req, e)

        write_line(resp.to_json_line())


async def main() -> None:
    loop = asyncio.get_running_loop()
    settings = Settings.load()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(levelname)s  %(name)s: %(message)s",
        stream=sys.stderr,
    )

    def write_line(text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()

    def write_notification(notification: Notification) -> None:
        write_line(notification.to_json_line())

    handler = ServerHandler(settings=settings, write_notification=write_notification)
    log.info("ready")

    reader = asyncio.StreamReader()
    protocol = asyncio.StreamReaderProtocol(reader)
    await loop.connect_read_pipe(lambda: protocol, sys.stdin)
    await serve(reader, handler, write_line)


if __name__ == "__main__":
    asyncio.run(main())
