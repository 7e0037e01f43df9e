"""
转写器抽象基类
"""
from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

from scribe_audio.models.audio import AudioSegment
from scribe_audio.models.transcript import TranscriptionOutput


class TranscriptionError(RuntimeError):
    """远端转写服务在全部重试后仍然失败"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class Transcriber(ABC):
    """音频转写器基类"""

    @abstractmethod
    def transcribe(self, payload: bytes, mime_type: str = "audio/wav") -> TranscriptionOutput:
        """
        将一段音频字节转写为文本

        :param payload: 音频字节（不会被修改）
        :param mime_type: 音频 MIME 类型，用于确定上传文件名
        :return: 转写结果
        """
        ...


def as_segment_callable(
    transcriber: Transcriber,
    segments: Sequence[AudioSegment],
) -> Callable[[bytes, int], str]:
    """把 Transcriber 适配为 Pipeline 需要的 (payload, index) -> text"""
    mime_types = {s.index: s.mime_type for s in segments}

    def _transcribe(payload: bytes, index: int) -> str:
        return transcriber.transcribe(payload, mime_types.get(index) or "audio/wav").text

    return _transcribe
