"""
基于 Groq API 的 Whisper 转写器
通过 Groq 的 OpenAI 兼容接口调用 whisper-large-v3-turbo
"""
import logging
import time
from typing import Callable, Optional

from openai import OpenAI

from scribe_audio.models.transcript import TranscriptionOutput
from scribe_audio.transcribers.base import TranscriptionError, Transcriber
from scribe_audio.utils.audio_format import extension_for_mime, format_file_size

logger = logging.getLogger(__name__)

GROQ_BASE_URL = "https://api.groq.com/openai/v1"

# 鉴权 / 权限错误重试无意义
NON_RETRYABLE_STATUS = {401, 403}


class GroqWhisperTranscriber(Transcriber):
    """
    基于 Groq API 的 Whisper 转写器

    单次请求上限约 25MB，大文件需先切分
    失败时最多尝试 max_attempts 次，第 n 次失败后等待 2n 秒

    获取 API Key: https://console.groq.com/keys
    """

    def __init__(
        self,
        api_key: str,
        model: str = "whisper-large-v3-turbo",
        language: str | None = "nl",
        temperature: float = 0.0,
        prompt: str | None = None,
        base_url: str = GROQ_BASE_URL,
        timeout: float = 120.0,
        max_attempts: int = 3,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.model = model
        self.language = language
        self.temperature = temperature
        self.prompt = prompt
        self.max_attempts = max(1, max_attempts)
        self._sleep = sleep
        self.client = OpenAI(
            api_key=api_key.strip(),
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
        )
        logger.info(f"[GroqWhisper] 初始化完成: model={model}, language={language}")

    def transcribe(self, payload: bytes, mime_type: str = "audio/wav") -> TranscriptionOutput:
        """
        通过 Groq API 转写音频

        :param payload: 音频字节
        :param mime_type: 音频 MIME 类型
        :return: TranscriptionOutput
        """
        mime_type = mime_type or "audio/wav"
        filename = f"audio.{extension_for_mime(mime_type)}"
        logger.info(f"[GroqWhisper] 开始转写: {filename}, {format_file_size(len(payload))}")

        kwargs = {
            "model": self.model,
            "file": (filename, payload, mime_type),
            "response_format": "verbose_json",
            "temperature": self.temperature,
        }
        if self.language:
            kwargs["language"] = self.language
        if self.prompt:
            kwargs["prompt"] = self.prompt

        response = None
        last_error: Optional[Exception] = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                response = self.client.audio.transcriptions.create(**kwargs)
                break
            except Exception as exc:
                last_error = exc
                status = getattr(exc, "status_code", None)
                logger.warning(
                    f"[GroqWhisper] 第 {attempt}/{self.max_attempts} 次尝试失败: "
                    f"status={status}, error={exc}"
                )
                if status in NON_RETRYABLE_STATUS:
                    break
                if attempt < self.max_attempts:
                    self._sleep(attempt * 2)

        if response is None:
            status = getattr(last_error, "status_code", None)
            raise TranscriptionError(
                f"Groq transcription failed: {last_error or 'all attempts failed'}",
                status_code=status,
            ) from last_error

        text = (getattr(response, "text", None) or "").strip()
        duration = float(getattr(response, "duration", None) or 0.0)
        language = getattr(response, "language", None) or self.language

        logger.info(f"[GroqWhisper] 转写完成: 语言={language}, 总字数={len(text)}")

        return TranscriptionOutput(text=text, duration=duration, language=language)
