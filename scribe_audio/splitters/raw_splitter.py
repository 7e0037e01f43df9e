"""
按字节切分的降级切分器

没有解码器（或解码失败）时使用: 直接把原始字节按上限切块，
时间范围按字节偏移比例从估算时长中分配

注意: 对大多数压缩格式，截断的字节片段并不是可以独立解析的文件，
能否被远端转写服务接受取决于具体容器格式
"""
import logging
from typing import Optional

from scribe_audio.models.audio import AudioSegment, AudioSplitResult
from scribe_audio.splitters.base import MAX_FILE_SIZE, AudioSplitter
from scribe_audio.splitters.duration import DurationEstimator
from scribe_audio.utils.audio_format import format_duration, format_file_size

logger = logging.getLogger(__name__)


class RawByteSplitter(AudioSplitter):
    """按 max_segment_bytes 切分原始字节，每段大小严格不超过上限"""

    def __init__(
        self,
        max_segment_bytes: int = MAX_FILE_SIZE,
        estimator: Optional[DurationEstimator] = None,
    ):
        super().__init__(max_segment_bytes)
        self.estimator = estimator or DurationEstimator()

    def name(self) -> str:
        return "raw"

    def split(self, payload: bytes, mime_type: str = "") -> AudioSplitResult:
        total_size = len(payload)
        if total_size == 0:
            raise ValueError("音频为空，无法切分")

        total_duration = self.estimator.estimate(total_size, mime_type)
        num_segments = -(-total_size // self.max_segment_bytes)

        logger.info(
            f"[Splitter] 按字节切分 {format_file_size(total_size)} 为 {num_segments} 段 "
            f"(估算时长 {format_duration(total_duration)})"
        )

        segments: list[AudioSegment] = []
        offset = 0
        while offset < total_size:
            chunk_size = min(self.max_segment_bytes, total_size - offset)
            start_time = offset / total_size * total_duration
            end_time = (offset + chunk_size) / total_size * total_duration

            segments.append(
                AudioSegment(
                    payload=payload[offset:offset + chunk_size],
                    index=len(segments),
                    duration=end_time - start_time,
                    size=chunk_size,
                    start_time=start_time,
                    end_time=end_time,
                    mime_type=mime_type,
                )
            )
            logger.info(
                f"[Splitter] 片段 {len(segments)}/{num_segments}: "
                f"{format_file_size(chunk_size)}, {format_duration(end_time - start_time)}"
            )
            offset += chunk_size

        return AudioSplitResult(
            segments=segments,
            total_size=total_size,
            total_duration=total_duration,
        )
