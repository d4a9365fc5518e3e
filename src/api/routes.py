"""
src/api/routes.py
==================
HTTP Endpoints — LyricPractice Audio & Pronunciation Core

Responsibility:
    - POST /api/v1/audio/optimize          base64 WAV → optimized WAV + stats
    - POST /api/v1/audio/validate          base64 WAV → format diagnostics
    - POST /api/v1/pronunciation/score     expected + actual text → accuracy
    - POST /api/v1/pronunciation/tokenize  phonetic guide → practice words
    - GET  /health

Recordings that cannot be processed are reported to the client with a
generic retry message; the internal reason is only logged. Validation
problems on an optimized buffer are logged and returned, never fatal.

This layer does NOT:
    - Call the pronunciation-assessment, recognition or translation APIs
    - Authenticate users or persist practice stats
"""

import asyncio
import base64
import logging
import os

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from src.audio.optimizer import decode_base64_audio, optimize_audio
from src.audio.validator import validate_audio
from src.audio.wav import AudioProcessingError
from src.pronunciation.scorer import calculate_accuracy
from src.pronunciation.tiers import (
    accuracy_feedback,
    accuracy_percent,
    classify_accuracy,
)
from src.pronunciation.tokenizer import tokenize_phonetic_words

logger = logging.getLogger("lyricpractice.api")

RECORDING_ERROR_DETAIL: str = "Could not process the recording, please try again."

# Lyric lines are short; the edit-distance DP is quadratic in text length.
MAX_SCORE_TEXT_LENGTH: int = 500

CORS_ALLOW_ORIGINS: list[str] = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------


class AudioRequest(BaseModel):
    audio: str


class ScoreRequest(BaseModel):
    expected: str = Field(max_length=MAX_SCORE_TEXT_LENGTH)
    actual: str = Field(max_length=MAX_SCORE_TEXT_LENGTH)


class TokenizeRequest(BaseModel):
    phonetic_guide: str


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

app = FastAPI(
    title="LyricPractice Core",
    description="Audio optimization and pronunciation scoring for lyric practice.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/api/v1/audio/optimize")
async def optimize_recording(body: AudioRequest):
    """
    Optimize a recording for the pronunciation-assessment API.

    Returns the optimized WAV (base64), its metadata, the compression ratio,
    and the validation outcome of the optimized buffer.
    """
    logger.info("Optimize request received: %.2f KB base64.", len(body.audio) / 1024)

    try:
        result = await asyncio.to_thread(optimize_audio, body.audio)
    except AudioProcessingError as exc:
        logger.error("Recording could not be optimized: %s", exc)
        raise HTTPException(status_code=422, detail=RECORDING_ERROR_DETAIL)
    except Exception as exc:
        logger.error("Audio optimization unexpected error: %s", exc, exc_info=True)
        raise HTTPException(status_code=500, detail=RECORDING_ERROR_DETAIL)

    validation = validate_audio(result.buffer)
    if not validation.valid:
        logger.warning(
            "Optimized audio still violates API requirements: %s", validation.errors
        )

    return {
        "audio": base64.b64encode(result.buffer).decode("ascii"),
        "metadata": result.metadata.to_dict(),
        "original_metadata": result.original_metadata.to_dict(),
        "compression_ratio_percent": round(result.compression_ratio_percent, 2),
        "validation": validation.to_dict(),
    }


@app.post("/api/v1/audio/validate")
async def validate_recording(body: AudioRequest):
    try:
        buffer = decode_base64_audio(body.audio)
    except AudioProcessingError as exc:
        logger.warning("Validation input could not be decoded: %s", exc)
        return {"valid": False, "errors": [str(exc)]}

    return validate_audio(buffer).to_dict()


@app.post("/api/v1/pronunciation/score")
async def score_pronunciation(body: ScoreRequest):
    accuracy = await asyncio.to_thread(calculate_accuracy, body.expected, body.actual)
    tier = classify_accuracy(accuracy)

    logger.info("Scored attempt: accuracy=%.2f tier=%s", accuracy, tier.value)
    return {
        "accuracy": accuracy,
        "percent": accuracy_percent(accuracy),
        "tier": tier.value,
        "feedback": accuracy_feedback(accuracy).to_dict(),
    }


@app.post("/api/v1/pronunciation/tokenize")
async def tokenize_guide(body: TokenizeRequest):
    return {"words": tokenize_phonetic_words(body.phonetic_guide)}
