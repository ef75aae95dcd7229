"""
HTTP server for the ResumeBot web interface.
Serves the static browser UI and the JSON API.
"""

import http.server
import json
import sys
import traceback
from functools import partial
from pathlib import Path

from rich.console import Console

from resumebot.api import analyze_resume, git_log
from resumebot.config import Config

console = Console()

ROUTES = {
    "/api/git-log": git_log,
    "/api/analyze-resume": analyze_resume,
}


class ResumeBotHandler(http.server.SimpleHTTPRequestHandler):
    """Static file handler with CORS support and the two POST endpoints."""

    def end_headers(self):
        # CORS headers for local development
        self.send_header('Access-Control-Allow-Origin', '*')
        self.send_header('Access-Control-Allow-Methods', 'GET, POST, OPTIONS')
        self.send_header('Access-Control-Allow-Headers', 'Content-Type')
        super().end_headers()

    def do_OPTIONS(self):
        self.send_response(200)
        self.end_headers()

    def do_POST(self):
        handler = ROUTES.get(self._clean_path())
        if handler is None:
            self._send_json({"error": "Not found"}, 404)
            return
        body = self._read_json_body()
        if body is None:
            return
        self._call_api(handler, body)

    # --- Helpers ---

    def _call_api(self, func, *args):
        """Call an API function with error handling to always return JSON."""
        try:
            payload, status = func(*args)
            self._send_json(payload, status)
        except Exception as e:
            traceback.print_exc()
            self._send_json({"error": str(e)}, 500)

    def _clean_path(self):
        return self.path.split('?', 1)[0].split('#', 1)[0]

    def _send_json(self, data, status=200):
        body = json.dumps(data, ensure_ascii=False).encode('utf-8')
        self.send_response(status)
        self.send_header('Content-Type', 'application/json; charset=utf-8')
        self.send_header('Content-Length', str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _read_json_body(self):
        try:
            content_length = int(self.headers.get('Content-Length', 0) or 0)
        except ValueError:
            self._send_json({"error": "Invalid Content-Length"}, 400)
            return None
        if content_length <= 0:
            self._send_json({"error": "Request body required"}, 400)
            return None
        try:
            data = json.loads(self.rfile.read(content_length))
        except (json.JSONDecodeError, ValueError):
            self._send_json({"error": "Invalid JSON"}, 400)
            return None
        if not isinstance(data, dict):
            self._send_json({"error": "Request body must be a JSON object"}, 400)
            return None
        return data

    def log_message(self, format, *args):
        sys.stderr.write("%s - %s\n" % (self.address_string(), format % args))


def create_server(port: int, host: str = "", static_dir: Path | None = None) -> http.server.ThreadingHTTPServer:
    """Build a threaded server; each request is handled on its own thread."""
    directory = static_dir or Config.static_dir()
    handler = partial(ResumeBotHandler, directory=str(directory))
    http.server.ThreadingHTTPServer.allow_reuse_address = True
    return http.server.ThreadingHTTPServer((host, port), handler)


def run_server(port: int | None = None) -> None:
    """Start the web server and block until interrupted."""
    port = port or Config.default_port()
    with create_server(port) as httpd:
        console.rule("[bold]ResumeBot Web Server[/bold]")
        console.print(f"🌐 Server running at http://localhost:{port}")
        console.print(f"📱 Open http://localhost:{port} in your browser")
        console.print("[dim]Press Ctrl+C to stop the server[/dim]")

        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            console.print("\n👋 Server stopped.")
