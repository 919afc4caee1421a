from __future__ import annotations

from dataclasses import asdict

from flask import Flask, Response, jsonify, request

from .config import SETTINGS, configure_logging
from .infrastructure.network import ImageLoadError, UnsupportedSourceError
from .infrastructure.responses import render_css, render_swatches, send_png
from .processing.color import InvalidColorError
from .processing.shades import derive_shades
from .theme import ThemeApplier

APP_VERSION = "1.0.0"


def _json_object() -> dict:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def create_app(applier: ThemeApplier | None = None) -> Flask:
    logger = configure_logging()
    app = Flask(__name__)
    theme = applier or ThemeApplier()
    registry = theme.registry

    def tokens_payload() -> dict:
        return {
            "tokens": registry.snapshot(),
            "state": registry.state,
            "generation": registry.generation,
        }

    @app.route("/tokens")
    def tokens():
        return jsonify(tokens_payload())

    @app.route("/tokens.css")
    def tokens_css():
        return Response(render_css(registry.snapshot()), mimetype="text/css")

    @app.route("/preview.png")
    def preview():
        return send_png(render_swatches(registry.snapshot()))

    @app.route("/extract", methods=["POST"])
    def extract():
        payload = _json_object()
        source = payload.get("source")
        if not isinstance(source, str) or not source.strip():
            return jsonify(error="Missing 'source'"), 400
        try:
            result = theme.extract_and_apply(source)
        except UnsupportedSourceError as exc:
            return jsonify(error=str(exc)), 400
        except ImageLoadError as exc:
            return jsonify(error=str(exc), **tokens_payload()), 502
        body = jsonify(
            palette=result.palette.to_hex(),
            fallback=result.palette.is_fallback,
            applied=result.applied,
            **tokens_payload(),
        )
        # A newer request claimed the table first; the palette was not applied.
        return body, (200 if result.applied else 409)

    @app.route("/custom-color", methods=["POST"])
    def custom_color():
        payload = _json_object()
        try:
            shades = theme.apply_base_color(payload.get("color"))
        except InvalidColorError as exc:
            return jsonify(error=str(exc)), 400
        return jsonify(shades=shades.to_hex(), **tokens_payload())

    @app.route("/shades/<color>")
    def shades(color: str):
        try:
            return jsonify(derive_shades(color).to_hex())
        except InvalidColorError as exc:
            return jsonify(error=str(exc)), 400

    @app.route("/reset", methods=["POST"])
    def reset():
        theme.reset()
        return jsonify(tokens_payload())

    @app.route("/health")
    def health():
        return jsonify(
            ok=True,
            version=APP_VERSION,
            state=registry.state,
            generation=registry.generation,
        )

    @app.route("/settings")
    def settings_view():
        return jsonify(asdict(SETTINGS))

    logger.debug("Theme service ready (discard_stale=%s)", theme.discard_stale)
    return app


# Expose a module-level Flask application for Gunicorn import paths like ``wallpaper_theme.app:app``
# and provide a conventional ``application`` alias for WSGI servers that default to that name.
app = create_app()
application = app
