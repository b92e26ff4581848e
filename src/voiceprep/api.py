"""FastAPI interface for voiceprep."""

import json
from typing import NoReturn
from uuid import uuid4

from fastapi import FastAPI, File, Header, HTTPException, Query, UploadFile
from fastapi.responses import Response

from .audio_contract import UnsupportedAudioFormatError
from .errors import DecodeError, EmptyBufferError, EncodingInvariantViolation, UnknownProfileError, VoicePrepError
from .interfaces.api_handlers import prepare_uploaded_bytes, validate_uploaded_bytes
from .interfaces.serialization import levels_to_dict

app = FastAPI(title="voiceprep API", version="0.1.0")


def _status_for_error(error: VoicePrepError) -> int:
    if isinstance(error, (UnsupportedAudioFormatError, DecodeError)):
        return 415
    if isinstance(error, EmptyBufferError):
        return 400
    if isinstance(error, EncodingInvariantViolation):
        return 500
    return 400


def _raise_for_error(error: VoicePrepError) -> NoReturn:
    detail: dict[str, str] = error.as_dict()
    if isinstance(error, UnknownProfileError):
        detail["parameter"] = "profile"
    raise HTTPException(status_code=_status_for_error(error), detail=detail) from error


@app.get("/health")
def health() -> dict[str, str]:
    """Health check endpoint."""

    return {"status": "ok"}


@app.post("/validate")
async def validate(
    sample: UploadFile = File(..., description="Recorded voice sample"),
    profile: str | None = Query(None, description="Voice profile id; defaults to VOICEPREP_PROFILE."),
    x_correlation_id: str | None = Header(default=None, alias="X-Correlation-Id"),
) -> dict:
    """Check a sample against the profile's size and duration policy."""

    correlation_id = x_correlation_id or str(uuid4())
    sample_bytes = await sample.read()
    try:
        validation, profile_id = validate_uploaded_bytes(
            sample_bytes=sample_bytes,
            media_type=sample.content_type,
            profile_id=profile,
            correlation_id=correlation_id,
        )
    except VoicePrepError as error:
        _raise_for_error(error)

    return {"profile_id": profile_id, "correlation_id": correlation_id, **validation.as_dict()}


@app.post("/prepare")
async def prepare(
    sample: UploadFile = File(..., description="Recorded voice sample"),
    profile: str | None = Query(None, description="Voice profile id; defaults to VOICEPREP_PROFILE."),
    x_correlation_id: str | None = Header(default=None, alias="X-Correlation-Id"),
) -> Response:
    """Prepare a recorded sample and return the normalized mono WAV bytes."""

    correlation_id = x_correlation_id or str(uuid4())
    sample_bytes = await sample.read()
    try:
        result, profile_id = prepare_uploaded_bytes(
            sample_bytes=sample_bytes,
            media_type=sample.content_type,
            profile_id=profile,
            correlation_id=correlation_id,
        )
    except VoicePrepError as error:
        _raise_for_error(error)

    if result.encoded is None:
        raise HTTPException(
            status_code=422,
            detail={"profile_id": profile_id, **result.validation.as_dict()},
        )

    response = Response(content=result.encoded.data, media_type=result.encoded.media_type)
    response.headers["X-Correlation-Id"] = correlation_id
    response.headers["X-Profile-Id"] = profile_id
    response.headers["X-Sample-Duration-Seconds"] = f"{result.validation.duration_seconds:.3f}"
    response.headers["X-Output-Levels"] = json.dumps(
        levels_to_dict(result.output_levels),
        separators=(",", ":"),
    )
    return response
