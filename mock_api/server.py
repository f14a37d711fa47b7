"""Mock sign-in API server for local development.

Serves the three endpoints the client calls:
- POST /api/login     any non-empty username/password is accepted
- POST /api/register  same rules as login
- POST /api/save-otp  any 6-digit code except 000000 is accepted
"""
import argparse
import json
import logging
import re
import socketserver
from http.server import BaseHTTPRequestHandler
from typing import Any, Dict, Tuple

# Configure logging - show important messages only
logging.basicConfig(
    level=logging.INFO,
    format='%(levelname)s: %(message)s'
)
logger = logging.getLogger(__name__)

# Code the mock always refuses, to exercise the rejection path
REJECTED_OTP = "000000"


def handle_api(path: str, payload: Dict[str, Any]) -> Tuple[int, Dict[str, Any]]:
    """Answer one API call.

    Returns:
        Tuple[int, Dict[str, Any]]: Status code and JSON body
    """
    if path in ("/api/login", "/api/register"):
        username = payload.get("username") or ""
        password = payload.get("password") or ""
        if not username or not password:
            return 400, {"message": "Username and password are required"}
        action = "Registration" if path.endswith("register") else "Login"
        return 200, {"message": f"{action} successful", "username": username}

    if path == "/api/save-otp":
        otp = str(payload.get("otp") or "")
        if not payload.get("username"):
            return 400, {"message": "Missing username"}
        if not re.fullmatch(r"[0-9]{6}", otp) or otp == REJECTED_OTP:
            return 400, {"message": "Failed to save OTP"}
        return 200, {"message": "OTP saved"}

    return 404, {"message": "Not found"}


class MockApiHandler(BaseHTTPRequestHandler):
    """Handler for the mock sign-in API."""

    def _send_json(self, status: int, content: Dict[str, Any]) -> None:
        """Send JSON content with CORS headers"""
        try:
            self.send_response(status)
            self.send_header("Content-type", "application/json")
            self._send_cors_headers()
            self.end_headers()
            self.wfile.write(json.dumps(content).encode('utf-8'))
            self.wfile.flush()
        except Exception as e:
            # Client probably disconnected
            logger.debug("Connection closed: %s", e)

    def _send_cors_headers(self):
        """Send CORS headers."""
        self.send_header('Access-Control-Allow-Origin', '*')
        self.send_header('Access-Control-Allow-Methods', 'POST, OPTIONS')
        self.send_header('Access-Control-Allow-Headers', 'Content-Type, x-client-api-key')

    def log_message(self, format, *args):
        """Log a message."""
        pass  # Suppress default logging

    def do_OPTIONS(self):
        """Handle OPTIONS requests for CORS preflight."""
        self.send_response(200)
        self._send_cors_headers()
        self.end_headers()

    def do_POST(self):
        """Handle POST requests."""
        content_length = int(self.headers.get('Content-Length', 0))
        body = self.rfile.read(content_length) if content_length > 0 else b"{}"
        try:
            payload = json.loads(body.decode('utf-8'))
        except json.JSONDecodeError as e:
            logger.error("Failed to parse request body: %s", e)
            self._send_json(400, {"message": "Invalid JSON"})
            return
        if not isinstance(payload, dict):
            self._send_json(400, {"message": "Invalid JSON"})
            return

        status, content = handle_api(self.path, payload)
        logger.info("%s -> %d", self.path, status)
        self._send_json(status, content)


def run_server(port=8001):
    """Run the mock server."""
    logger.info("Sign-in mock API up at: http://localhost:%d/api", port)

    socketserver.TCPServer.allow_reuse_address = True
    server = socketserver.TCPServer(("", port), MockApiHandler)

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    finally:
        server.server_close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Mock sign-in API server")
    parser.add_argument("--port", type=int, default=8001, help="Server port (default: 8001)")
    run_server(parser.parse_args().port)
