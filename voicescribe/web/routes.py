"""Web UI routes for VoiceScribe."""

import logging

from flask import (
    Blueprint,
    Response,
    current_app,
    jsonify,
    render_template,
    request,
)

from voicescribe import service
from voicescribe.exporters import SUPPORTED_FORMATS
from voicescribe.service import Services, TranscriptNotFoundError, UploadRejectedError

logger = logging.getLogger(__name__)

bp = Blueprint("web", __name__, template_folder="templates")


def _services() -> Services:
    return current_app.config["SERVICES"]


def _error(message: str, status: int):
    return jsonify({"error": message}), status


@bp.route("/")
def index():
    return render_template("index.html", formats=SUPPORTED_FORMATS)


@bp.route("/api/transcribe", methods=["POST"])
def transcribe():
    f = request.files.get("audio")
    if f is None:
        logger.warning("No audio file provided in request")
        return _error("No audio file provided", 400)

    try:
        transcript = service.transcribe_audio(
            f.read(),
            f.filename or "recording",
            f.mimetype,
            _services(),
            language=request.form.get("language") or None,
            model=request.form.get("model") or None,
        )
    except UploadRejectedError as e:
        logger.warning("Upload rejected: %s", e)
        return _error(str(e), 400)

    return jsonify(transcript.to_dict())


@bp.route("/api/transcribe", methods=["GET"])
def get_transcription():
    transcript_id = request.args.get("id")
    if not transcript_id:
        return _error("No transcription ID provided", 400)

    try:
        transcript = service.get_transcript(_services().store, transcript_id)
    except TranscriptNotFoundError as e:
        return _error(str(e), 404)
    return jsonify(transcript.to_dict())


@bp.route("/api/transcribe", methods=["PUT"])
def update_transcription():
    transcript_id = request.args.get("id")
    if not transcript_id:
        return _error("No transcription ID provided", 400)

    body = request.get_json(silent=True)
    if body is None:
        body = {}
    if not isinstance(body, dict):
        return _error("Request body must be a JSON object", 400)
    try:
        transcript = service.update_transcript(_services().store, transcript_id, body.get("text"))
    except TranscriptNotFoundError as e:
        return _error(str(e), 404)
    except ValueError as e:
        return _error(str(e), 400)
    return jsonify(transcript.to_dict())


@bp.route("/api/export")
def export():
    transcript_id = request.args.get("id")
    if not transcript_id:
        logger.warning("No transcription ID provided in export request")
        return _error("No transcription ID provided", 400)

    try:
        result, filename = service.export(
            _services().store, transcript_id, request.args.get("format", "text")
        )
    except TranscriptNotFoundError as e:
        return _error(str(e), 404)

    return Response(
        result.content,
        content_type=result.content_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@bp.route("/api/storage", methods=["GET"])
def get_audio():
    file_id = request.args.get("id")
    if not file_id:
        return _error("No file ID provided", 400)

    try:
        found = _services().storage.get(file_id)
    except ValueError as e:
        return _error(str(e), 400)
    if found is None:
        return _error("File not found", 404)

    info, data = found
    return Response(
        data,
        content_type=info.content_type,
        headers={"Content-Disposition": f'inline; filename="{file_id}.{info.extension}"'},
    )


@bp.route("/api/storage", methods=["DELETE"])
def delete_audio():
    file_id = request.args.get("id")
    if not file_id:
        return _error("No file ID provided", 400)

    try:
        deleted = _services().storage.delete(file_id)
    except ValueError as e:
        return _error(str(e), 400)
    if not deleted:
        return _error("File not found or could not be deleted", 404)
    return jsonify({"success": True})
