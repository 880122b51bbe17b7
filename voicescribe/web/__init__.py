"""Flask application factory for the VoiceScribe web UI."""

import logging
from pathlib import Path

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from voicescribe.backends import get_backend
from voicescribe.backends.base import TranscriptionBackend
from voicescribe.config import Settings, load_settings
from voicescribe.service import Services
from voicescribe.storage import AudioStorage
from voicescribe.store import TranscriptStore

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    storage_dir: Path | None = None,
    backend: TranscriptionBackend | None = None,
) -> Flask:
    settings = settings or load_settings()
    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    app.config["MAX_CONTENT_LENGTH"] = settings.audio.max_upload_bytes
    app.config["SERVICES"] = Services(
        settings=settings,
        backend=backend or get_backend(settings.transcription.backend, settings),
        storage=AudioStorage(storage_dir or settings.storage_dir, settings.max_cached_files),
        store=TranscriptStore(settings.max_transcripts),
    )

    from voicescribe.web.routes import bp
    app.register_blueprint(bp)

    @app.errorhandler(413)
    def request_entity_too_large(error):
        return jsonify({"error": "File too large"}), 413

    @app.errorhandler(Exception)
    def unhandled_error(error):
        if isinstance(error, HTTPException):
            return jsonify({"error": error.description}), error.code
        logger.exception("Unhandled error")
        return jsonify({"error": "Internal server error"}), 500

    return app
