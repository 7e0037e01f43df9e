"""
转写服务
编排整个流程: 大小判断 → (超限) 切分 → 逐段转写 → 合并
"""
import logging
from typing import Optional

from scribe_audio.config import settings
from scribe_audio.models.transcript import TranscriptionOutcome
from scribe_audio.services.segment_pipeline import process_audio_segments
from scribe_audio.splitters.base import MAX_FILE_SIZE, AudioSplitter, is_file_size_exceeded
from scribe_audio.splitters.raw_splitter import RawByteSplitter
from scribe_audio.splitters.selection import create_splitter, split_audio
from scribe_audio.transcribers.base import TranscriptionError, Transcriber, as_segment_callable
from scribe_audio.utils.audio_format import format_file_size

logger = logging.getLogger(__name__)


def create_transcriber(
    language: Optional[str] = None,
    prompt: Optional[str] = None,
    temperature: Optional[float] = None,
) -> Transcriber:
    """根据配置创建转写器实例（支持请求级别覆盖语言 / 提示词 / 温度）"""
    t_type = settings.transcriber_type.lower()

    if t_type == "groq":
        from scribe_audio.transcribers.groq_transcriber import GroqWhisperTranscriber
        if not settings.groq_api_key:
            raise ValueError("GROQ_API_KEY 未配置，请在 .env 中设置")
        return GroqWhisperTranscriber(
            api_key=settings.groq_api_key,
            model=settings.transcribe_model,
            language=language or settings.transcribe_language,
            temperature=settings.transcribe_temperature if temperature is None else temperature,
            prompt=prompt,
            base_url=settings.groq_base_url,
            timeout=settings.transcribe_timeout,
            max_attempts=settings.transcribe_max_attempts,
        )

    else:
        raise ValueError(f"不支持的转写器类型: {t_type}，可选: groq")


class TranscriptionService:
    """
    音频转写服务

    Pipeline 流程:
    1. 不超过上限的音频直接转写
    2. 超过上限的音频先切分（解码切分失败时降级为字节切分）
    3. 片段按顺序逐段转写，单段失败以占位文本代替
    """

    def __init__(
        self,
        transcriber: Transcriber,
        splitter: Optional[AudioSplitter] = None,
        fallback: Optional[AudioSplitter] = None,
        max_segment_bytes: int = MAX_FILE_SIZE,
    ):
        self.transcriber = transcriber
        self.max_segment_bytes = max_segment_bytes
        self.splitter = splitter or create_splitter("auto", max_segment_bytes=max_segment_bytes)
        self.fallback = fallback or RawByteSplitter(max_segment_bytes=max_segment_bytes)

    @classmethod
    def from_settings(cls, transcriber: Transcriber) -> "TranscriptionService":
        return cls(
            transcriber=transcriber,
            splitter=create_splitter(
                settings.split_strategy,
                max_segment_bytes=settings.max_segment_bytes,
                min_segment_seconds=settings.min_segment_seconds,
            ),
            max_segment_bytes=settings.max_segment_bytes,
        )

    def transcribe(self, payload: bytes, mime_type: str = "") -> TranscriptionOutcome:
        """
        主流程入口: 音频字节 → 完整转写文本

        :param payload: 音频字节
        :param mime_type: 音频 MIME 类型
        :return: TranscriptionOutcome
        """
        file_size = format_file_size(len(payload))
        needs_splitting = is_file_size_exceeded(payload, self.max_segment_bytes)
        logger.info(
            f"[Transcription] 音频 {file_size} - {'需要切分' if needs_splitting else '直接转写'}"
        )

        if not needs_splitting:
            output = self.transcriber.transcribe(payload, mime_type or "audio/wav")
            return TranscriptionOutcome(
                transcript=output.text,
                duration=output.duration,
                segmented=False,
                file_size=file_size,
            )

        split_result = split_audio(payload, mime_type, splitter=self.splitter, fallback=self.fallback)
        if split_result.error:
            raise TranscriptionError(split_result.error)

        logger.info(f"[Transcription] 已切分为 {len(split_result.segments)} 段")

        processed = process_audio_segments(
            split_result.segments,
            as_segment_callable(self.transcriber, split_result.segments),
        )
        if processed.errors:
            logger.warning(f"[Transcription] 部分片段失败: {processed.errors}")

        return TranscriptionOutcome(
            transcript=processed.combined_transcript,
            duration=processed.total_duration,
            segmented=True,
            file_size=file_size,
            segment_errors=processed.errors,
        )
