from __future__ import annotations

import io
import logging
from dataclasses import asdict

from flask import Flask, jsonify, request, send_file

from . import __version__
from .config import SETTINGS, ConversionSettings, ServiceSettings, configure_logging
from .errors import ConfigurationError, ConversionError, DecodeError, SourceFetchError
from .infrastructure.cache import CACHE, ResponseCache, cache_key
from .infrastructure.codec import decode_bytes, encode_bytes
from .infrastructure.network import FETCHER, SourceFetcher
from .processing.pipeline import convert_buffer

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ConfigurationError, 400),
    (SourceFetchError, 502),
    (DecodeError, 422),
)


def _status_for(exc: ConversionError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    if exc.stage == "validation":
        return 422
    return 500


def send_png(data: bytes):
    return send_file(io.BytesIO(data), mimetype="image/png")


def create_app(
    settings: ServiceSettings = SETTINGS,
    fetcher: SourceFetcher = FETCHER,
    cache: ResponseCache = CACHE,
) -> Flask:
    configure_logging(settings.log_level)
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = int(settings.max_upload_mb * 1024 * 1024)

    @app.errorhandler(ConversionError)
    def conversion_failed(exc: ConversionError):
        status = _status_for(exc)
        logger.warning("Conversion failed at %s: %s", exc.stage, exc.message)
        return jsonify(exc.to_dict()), status

    def request_settings() -> ConversionSettings:
        # Environment defaults are re-read per request so container config changes apply.
        return ConversionSettings.from_env().with_overrides(request.args.to_dict())

    @app.route("/convert", methods=["GET", "POST"])
    def convert():
        conversion = request_settings()

        if request.method == "POST":
            upload = request.files.get("image")
            if upload is None:
                return jsonify(success=False, error="Missing 'image' file field", error_code="MISSING_IMAGE"), 400
            buffer = decode_bytes(upload.read(), source=upload.filename or "<upload>")
            return send_png(encode_bytes(convert_buffer(buffer, conversion)))

        url = request.args.get("url")
        if not url:
            return jsonify(success=False, error="Missing 'url' query parameter", error_code="MISSING_URL"), 400

        key = cache_key(url, conversion)
        cached = cache.get(key)
        if cached is not None:
            logger.debug("Serving cached conversion of %s", url)
            return send_png(cached)

        buffer = decode_bytes(fetcher.fetch(url), source=url)
        data = encode_bytes(convert_buffer(buffer, conversion))
        cache.put(key, data)
        return send_png(data)

    @app.route("/health")
    def health():
        return jsonify(ok=True, version=__version__)

    @app.route("/settings")
    def settings_view():
        return jsonify(asdict(ConversionSettings.from_env()))

    return app


def main() -> None:
    """Run the Flask development server."""
    create_app().run(host="0.0.0.0", port=SETTINGS.port, debug=False)


# Expose a module-level Flask application for Gunicorn import paths like ``eink_image.app:app``.
app = create_app()
application = app
