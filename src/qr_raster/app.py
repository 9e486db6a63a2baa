"""Flask adapter exposing the encoder over HTTP."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from flask import Flask, Response, jsonify, request

from .errors import CapacityExceeded, InternalInvariant, QrError
from .request import QrRequest, RequestDefaults
from .service import generate
from .tables import ErrorCorrection

DEFAULT_CONFIG: Dict[str, Any] = {
    "DEFAULT_ERROR_CORRECTION": "M",
    "DEFAULT_PIXEL_SIZE": 8,
    "DEFAULT_MARGIN": 2,
    "MAX_IMAGE_SIDE": 4096,
    "CACHE_MAX_AGE": 31536000,
}


def _status_for(error: QrError) -> int:
    if isinstance(error, InternalInvariant):
        return 500
    if isinstance(error, CapacityExceeded):
        return 422
    return 400


def _error_response(error: QrError):
    if isinstance(error, InternalInvariant):
        message = "Failed to generate QR code"
    else:
        message = str(error)
    return jsonify({"error": message, "code": error.code}), _status_for(error)


def create_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    app = Flask(__name__)
    app.config.update(DEFAULT_CONFIG)
    app.config.from_prefixed_env("QR_RASTER")
    if config:
        app.config.update(config)

    defaults = RequestDefaults(
        error_correction=ErrorCorrection.parse(app.config["DEFAULT_ERROR_CORRECTION"]),
        pixel_size=int(app.config["DEFAULT_PIXEL_SIZE"]),
        margin=int(app.config["DEFAULT_MARGIN"]),
    )
    max_image_side = int(app.config["MAX_IMAGE_SIDE"])
    cache_control = f"public, max-age={int(app.config['CACHE_MAX_AGE'])}"

    @app.route("/api/generate-qr", methods=["GET", "POST"])
    def generate_qr():
        if request.method == "GET":
            payload = {key: value for key, value in request.args.items()}
        else:
            payload = request.get_json(silent=True) or {}
        if not isinstance(payload, dict):
            payload = {}

        try:
            qr_request = QrRequest.from_payload(payload, defaults)
        except QrError as exc:
            app.logger.info("invalid request: %s", exc)
            return _error_response(exc)

        result = generate(qr_request, max_image_side=max_image_side)
        if result.error is not None:
            return _error_response(result.error)

        response = Response(result.image, mimetype="image/png")
        response.headers["Content-Length"] = str(result.content_length)
        response.headers["Cache-Control"] = cache_control
        return response

    return app
