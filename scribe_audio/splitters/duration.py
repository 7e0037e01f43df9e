"""
基于码率的音频时长估算

仅在没有解码器时使用，结果是启发式估计而非真实时长
"""
import logging
from typing import Sequence

logger = logging.getLogger(__name__)

# (格式关键字, 码率 bit/s)，按顺序匹配
DEFAULT_BITRATES: list[tuple[tuple[str, ...], int]] = [
    (("wav",), 1_411_200),          # 未压缩 CD 音质
    (("flac",), 800_000),           # FLAC 平均码率
    (("mp4", "m4a"), 256_000),      # AAC 高码率
    (("ogg", "webm"), 192_000),     # Vorbis / Opus
    (("mp3", "mpeg"), 192_000),
]
DEFAULT_BITRATE = 128_000

MIN_DURATION_SECONDS = 1.0
MAX_DURATION_SECONDS = 4 * 60 * 60.0


class DurationEstimator:
    """
    根据字节数和格式估算时长

    时长 = 字节数 * 8 / 码率，并限制在 [1 秒, 4 小时] 之间
    """

    def __init__(
        self,
        bitrates: Sequence[tuple[tuple[str, ...], int]] = DEFAULT_BITRATES,
        default_bitrate: int = DEFAULT_BITRATE,
    ):
        self.bitrates = list(bitrates)
        self.default_bitrate = default_bitrate

    def bitrate_for(self, mime_type: str | None) -> int:
        """返回格式对应的假定码率"""
        lowered = (mime_type or "").lower()
        for keywords, bitrate in self.bitrates:
            if any(k in lowered for k in keywords):
                return bitrate
        return self.default_bitrate

    def estimate(self, byte_length: int, mime_type: str | None = None) -> float:
        bitrate = self.bitrate_for(mime_type)
        seconds = byte_length * 8 / bitrate
        clamped = max(MIN_DURATION_SECONDS, min(seconds, MAX_DURATION_SECONDS))
        if clamped != seconds:
            logger.debug(f"[Duration] 估算值 {seconds:.2f}s 超出范围，截断为 {clamped:.2f}s")
        return clamped
