"""
转写 API 路由

  1. POST /api/transcribe   — 上传音频 (multipart/form-data)，超过 25MB 自动切分
  2. GET  /api/transcribe   — 查询转写服务状态
"""
import logging
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile

from scribe_audio.config import settings
from scribe_audio.models.api import TranscribeResponse, TranscribeStatusResponse
from scribe_audio.services.transcription_service import TranscriptionService, create_transcriber
from scribe_audio.transcribers.base import TranscriptionError
from scribe_audio.utils.audio_format import (
    SUPPORTED_AUDIO_FORMATS,
    format_file_size,
    is_supported_audio_format,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["转写"])


# ==================== API Endpoints ====================


@router.post("/transcribe", summary="转写音频", response_model=TranscribeResponse)
def transcribe_audio(
    audio: Optional[UploadFile] = File(None),
    language: Optional[str] = Form(None),
    prompt: Optional[str] = Form(None),
    temperature: Optional[float] = Form(None),
):
    """
    转写上传的音频文件

    超过单次请求上限的文件会被切分后按顺序逐段转写，
    单段失败不影响其他片段，错误信息在 errors 中返回
    """
    if audio is None:
        raise HTTPException(status_code=400, detail="No audio file provided")

    mime_type = audio.content_type or ""
    if not is_supported_audio_format(mime_type):
        logger.info(f"[API] 不支持的格式: {mime_type}")
        raise HTTPException(
            status_code=400,
            detail=(
                f"Unsupported audio format: {mime_type}. "
                "Supported formats: WAV, MP3, MP4, WebM, OGG, FLAC, M4A"
            ),
        )

    payload = audio.file.read()
    logger.info(f"[API] 收到音频: name={audio.filename}, type={mime_type}, size={format_file_size(len(payload))}")

    if len(payload) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=(
                f"Audio file too large ({format_file_size(len(payload))}), "
                f"max allowed is {format_file_size(settings.max_upload_bytes)}"
            ),
        )

    try:
        transcriber = create_transcriber(language=language, prompt=prompt, temperature=temperature)
        service = TranscriptionService.from_settings(transcriber)
        outcome = service.transcribe(payload, mime_type)
    except TranscriptionError as e:
        logger.error(f"[API] 转写失败: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to process audio file: {e}")
    except Exception as e:
        logger.error(f"[API] 转写异常: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error during transcription: {e}")

    return TranscribeResponse(
        transcript=outcome.transcript,
        duration=outcome.duration,
        segmented=outcome.segmented,
        file_size=outcome.file_size,
        errors=outcome.segment_errors,
    )


@router.get("/transcribe", summary="查询转写服务状态", response_model=TranscribeStatusResponse)
def transcribe_status():
    """返回转写服务配置（不包含 API Key 本身）"""
    return TranscribeStatusResponse(
        message="Transcription API is running with automatic splitting",
        model=settings.transcribe_model,
        provider="Groq",
        supported_formats=SUPPORTED_AUDIO_FORMATS,
        max_segment_size=format_file_size(settings.max_segment_bytes),
        max_upload_size=format_file_size(settings.max_upload_bytes),
        splitting_enabled=True,
        split_strategy=settings.split_strategy,
        has_groq_key=bool(settings.groq_api_key),
    )
