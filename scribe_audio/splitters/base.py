"""
音频切分器抽象基类

远端转写服务 (Groq Whisper) 单次请求上限约 25MB，
超过上限的录音需要先切分为若干片段再逐段转写
"""
from abc import ABC, abstractmethod

from scribe_audio.models.audio import AudioSplitResult

# 与 Groq API 的文件大小上限保持一致，避免 413
MAX_FILE_SIZE = 25 * 1024 * 1024


class AudioDecodeError(RuntimeError):
    """解码器无法解析输入音频（损坏或格式不支持）"""


def is_file_size_exceeded(payload: bytes, max_size: int = MAX_FILE_SIZE) -> bool:
    """音频是否超过单次请求的大小上限"""
    return len(payload) > max_size


class AudioSplitter(ABC):
    """音频切分器基类"""

    def __init__(self, max_segment_bytes: int = MAX_FILE_SIZE):
        if max_segment_bytes <= 0:
            raise ValueError(f"max_segment_bytes 必须大于 0: {max_segment_bytes}")
        self.max_segment_bytes = max_segment_bytes

    @abstractmethod
    def split(self, payload: bytes, mime_type: str = "") -> AudioSplitResult:
        """
        将音频切分为按时间顺序排列的片段

        :param payload: 完整音频字节
        :param mime_type: 容器/格式标识 (audio/webm, audio/wav ...)
        :return: 切分结果
        """
        ...

    @abstractmethod
    def name(self) -> str:
        ...
