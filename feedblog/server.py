"""HTTP server for feedblog.

Serves the site over plain HTTP:
- A threaded stdlib HTTP server accepts connections.
- Every request is handed to Site.handle on one asyncio event loop running
  in a background thread, so the post cache and its fetch lock are only
  touched from that loop.

Key classes:
- FeedblogServer: Owns the site, the event loop and the HTTP server.
- _SiteHandler: HTTP request handler that dispatches GET/HEAD to the site.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

from .config import load_config
from .site import Response, Site

logger = logging.getLogger(__name__)


class _SiteHandler(BaseHTTPRequestHandler):
    """HTTP request handler that forwards GET and HEAD to a FeedblogServer.

    Attributes:
        app: Server the handler dispatches to; set on a per-server subclass.
    """

    app: FeedblogServer | None = None
    server_version = "feedblog"

    def do_GET(self):
        response = self._dispatch()
        self._send(response, include_body=True)

    def do_HEAD(self):
        response = self._dispatch()
        self._send(response, include_body=False)

    def _dispatch(self) -> Response:
        try:
            return self.app.dispatch(self.path)
        except Exception:
            logger.exception("Unhandled error for %s", self.path)
            return Response(
                500,
                "Internal Server Error",
                {"Content-Type": "text/plain;charset=UTF-8"},
            )

    def _send(self, response: Response, include_body: bool) -> None:
        encoded = response.body.encode("utf-8")
        self.send_response(response.status)
        for name, value in response.headers.items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(encoded)))
        self.end_headers()
        if include_body:
            self.wfile.write(encoded)

    def log_message(self, format, *args):
        logger.info("%s - %s", self.address_string(), format % args)


class FeedblogServer:
    """HTTP front end for a Site.

    Attributes:
        project_root: Root directory of the project.
        config: Site configuration.
        site: Site handling the requests.
        host: Interface to bind.
        http_port: Port for the HTTP server.
        _loop: Event loop running site coroutines.
    """

    def __init__(
        self,
        project_root: Path,
        http_port: int | None = None,
        host: str | None = None,
        site: Site | None = None,
    ):
        """Initialize the server.

        Args:
            project_root: Root directory of the project.
            http_port: Optional override for the HTTP port.
            host: Optional override for the bind address.
            site: Optional prebuilt site, mainly for tests.
        """
        self.project_root = project_root
        self.config = load_config(project_root)
        self.site = site or Site(self.config, template_dir=project_root / "templates")
        self.http_port = int(
            http_port if http_port is not None else self.config.get("port", 4000)
        )
        self.host = host if host is not None else str(self.config.get("host") or "")
        self._loop = asyncio.new_event_loop()
        self._loop_thread: threading.Thread | None = None
        self._httpd: ThreadingHTTPServer | None = None

    def dispatch(self, target: str, timeout: float | None = None) -> Response:
        """Run Site.handle for target on the server loop and wait for it."""
        future = asyncio.run_coroutine_threadsafe(self.site.handle(target), self._loop)
        return future.result(timeout)

    def start(self) -> None:  # pragma: no cover - integration path
        self._start_loop()
        self._httpd = self._make_httpd()
        shown_host = self.host or "localhost"
        logger.info("Serving feedblog at http://%s:%d", shown_host, self.http_port)
        try:
            self._httpd.serve_forever()
        except KeyboardInterrupt:
            pass
        finally:
            self.stop()

    def stop(self) -> None:
        if self._httpd:
            self._httpd.server_close()
            self._httpd = None
        if self._loop_thread:
            self._loop.call_soon_threadsafe(self._loop.stop)
            self._loop_thread.join(timeout=5)
            self._loop_thread = None
        if not self._loop.is_running() and not self._loop.is_closed():
            self._loop.close()

    def _start_loop(self) -> None:
        def run() -> None:
            asyncio.set_event_loop(self._loop)
            self._loop.run_forever()

        self._loop_thread = threading.Thread(target=run, daemon=True)
        self._loop_thread.start()

    def _make_httpd(self) -> ThreadingHTTPServer:
        handler_cls = type("_SiteHandlerWithApp", (_SiteHandler,), {"app": self})
        return ThreadingHTTPServer((self.host, self.http_port), handler_cls)
