import time
import uuid
import logging

from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from common.errors import ServiceError


def error_response(message, status):
    return jsonify({"error": message}), status


def install_hooks(app: Flask, logger: logging.Logger) -> None:
    """Request logging, ServiceError mapping and a last-resort recoverer."""

    @app.before_request
    def _start():
        g.request_id = uuid.uuid4().hex[:8]
        g.start = time.time()

    @app.after_request
    def _log(response):
        elapsed = time.time() - g.get("start", time.time())
        logger.info(f"[{request_id()}] {request.method} {request.path} "
                    f"-> {response.status_code} in {elapsed * 1000:.1f}ms")
        return response

    @app.errorhandler(ServiceError)
    def _service_error(e):
        return error_response(e.message, e.status_code)

    @app.errorhandler(Exception)
    def _unhandled(e):
        if isinstance(e, HTTPException):
            return e
        logger.exception(f"[{request_id()}] unhandled error")
        return error_response("internal server error", 500)

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok", "service": logger.name})


def request_id():
    return g.get("request_id", "n/a")


def read_json_object():
    """Decode the request body as a JSON object or return None."""
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        return None
    return data


def is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)
