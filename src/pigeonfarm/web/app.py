"""Flask application serving a development message feed."""
from __future__ import annotations

import logging
from typing import Any

from flask import Flask, jsonify, request

from ..config import DEFAULT_CONFIG, AppConfig
from ..services.feed_service import FeedService

logger = logging.getLogger(__name__)


def create_app(feed_service: FeedService) -> Flask:
    app = Flask(__name__)
    app.config["feed_service"] = feed_service

    @app.route("/messages.json")
    def current_message() -> Any:
        version = request.args.get("version")
        language = request.args.get("language")
        logger.debug("Message requested for version=%s language=%s", version, language)
        payload = feed_service.message_for(language)
        if payload is None:
            return jsonify({"error": "no message published"}), 404
        return jsonify(payload)

    @app.route("/messages", methods=["POST"])
    def publish_message() -> Any:
        payload = request.get_json(silent=True)
        language = request.args.get("language")
        if not isinstance(payload, dict):
            return jsonify({"error": "expected a JSON object"}), 400
        try:
            feed_service.publish(payload, language)
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400
        return jsonify({"published": payload.get("id")}), 201

    @app.route("/messages", methods=["DELETE"])
    def retract_message() -> Any:
        feed_service.retract(request.args.get("language"))
        return "", 204

    return app


def bootstrap_app(config: AppConfig = DEFAULT_CONFIG) -> tuple[Flask, FeedService]:
    """Factory used by the entrypoint for running the development feed."""

    config.ensure_data_directories()
    feed_service = FeedService()
    feed_service.load(config.messages_path)
    if not feed_service.messages:
        feed_service.publish(
            {
                "id": 1,
                "title": "Welcome",
                "message": "Thanks for trying the pigeonfarm client.",
                "buttons": [
                    {"title": "OK"},
                    {"title": "Learn more", "action": "url", "url": "https://example.com"},
                ],
            }
        )
    return create_app(feed_service), feed_service
