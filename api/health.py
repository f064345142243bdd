"""Health check endpoint."""

from http.server import BaseHTTPRequestHandler
import json

SERVICE_NAME = "taskboard-backend"


class handler(BaseHTTPRequestHandler):
    """Liveness handler for Vercel serverless function."""

    def do_GET(self):
        self.send_response(200)
        self.send_header('Content-Type', 'application/json')
        self.end_headers()
        response = json.dumps({"status": "ok", "service": SERVICE_NAME})
        self.wfile.write(response.encode('utf-8'))

    def do_HEAD(self):
        self.send_response(200)
        self.send_header('Content-Type', 'application/json')
        self.end_headers()
