"""api.py — HTTP endpoint for scramble/replay sessions
======================================================

Small Flask application exposing the scramble session to a browser
visualizer, plus the background server wrapper used by `main.py`.

Endpoints
- GET /solve?scramble=<tokens>  -> states, replayed moves and diagnostics
- GET /health                   -> basic liveness JSON

Threading model / shared state
- Flask server: runs in its own background thread (Werkzeug `make_server`
  wrapped in `_Server`, threaded=True).
- Every /solve request builds its own `ScrambleSession`; nothing is shared
  between requests, so no locking is needed.

Error handling
- The session driver returns (ok, result_or_message). Failures become a
  500 with body {"error": "<message>"}; double quotes in the message are
  replaced with single quotes. Anything that escapes a route gets the same
  treatment from the app-wide error handler.
------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. MIT License.
"""

import logging
import threading

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from werkzeug.serving import make_server

from config import JSON_CONTENT_TYPE, SCRAMBLE_PARAM
from scramble_session import run_scramble

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def _error_message(msg) -> str:
    # single line, no double quotes
    return " ".join(str(msg).split()).replace('"', "'")


def _json(payload, status: int = 200):
    response = jsonify(payload)
    response.status_code = status
    response.headers["Content-Type"] = JSON_CONTENT_TYPE
    return response


# ---------- Flask server wrapper ----------
class _Server(threading.Thread):
    """Run Werkzeug/Flask in a background daemon thread using `make_server`.

    Keeps the server lifecycle separate from the CLI so it can be stopped
    gracefully from a signal handler.
    """

    def __init__(self, app, host, port):
        super().__init__(daemon=True)
        self._app = app
        self._host = host
        self._port = port
        # bind now so port errors surface in the caller
        self._server = make_server(self._host, self._port, self._app, threaded=True)

    @property
    def port(self) -> int:
        return self._server.server_port

    def run(self):
        try:
            self._server.serve_forever()
        except Exception as e:
            logger.exception("[HTTP] server stopped with error: %s", e)

    def shutdown(self):
        if self._server:
            self._server.shutdown()
            self._server.server_close()
            self._server = None


# ---------- Flask app / endpoints ----------

def create_app() -> Flask:
    """Create and return a Flask application configured with CORS."""
    app = Flask(__name__)
    # keep the documented key order (states, moves, scrambleLength, ...)
    app.json.sort_keys = False

    CORS(app, resources={r"/*": {"origins": "*"}})

    @app.after_request
    def _add_cors_headers(response):
        response.headers['Access-Control-Allow-Origin'] = '*'
        return response

    @app.errorhandler(Exception)
    def _unhandled(e):
        if isinstance(e, HTTPException):
            return e
        logger.exception("[HTTP] unhandled error: %s", e)
        return _json({"error": _error_message(e)}, 500)

    @app.route("/health")
    def _health():
        return _json({"ok": True})

    @app.route("/solve")
    def _solve():
        # repeated parameters: the last one wins
        values = request.args.getlist(SCRAMBLE_PARAM)
        scramble = values[-1] if values else ""
        ok, payload = run_scramble(scramble)
        if not ok:
            return _json({"error": _error_message(payload)}, 500)
        logger.info(
            "[HTTP] /solve scramble=%r moves=%d solved=%s",
            scramble, len(payload.moves), payload.final_solved,
        )
        return _json(payload.to_dict())

    return app
