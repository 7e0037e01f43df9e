"""
切分策略选择与降级

auto / sample: 先尝试解码切分，解码失败时降级为按字节切分
raw: 直接按字节切分
"""
import logging
from typing import Optional

from scribe_audio.models.audio import AudioSplitResult
from scribe_audio.splitters.base import MAX_FILE_SIZE, AudioDecodeError, AudioSplitter
from scribe_audio.splitters.duration import DurationEstimator
from scribe_audio.splitters.raw_splitter import RawByteSplitter
from scribe_audio.splitters.sample_splitter import SampleAccurateSplitter

logger = logging.getLogger(__name__)

SPLIT_STRATEGIES = ("auto", "sample", "raw")


def create_splitter(
    strategy: str = "auto",
    max_segment_bytes: int = MAX_FILE_SIZE,
    min_segment_seconds: float = 30.0,
    estimator: Optional[DurationEstimator] = None,
) -> AudioSplitter:
    """根据策略名创建切分器"""
    strategy = strategy.lower()

    if strategy in ("auto", "sample"):
        return SampleAccurateSplitter(
            max_segment_bytes=max_segment_bytes,
            min_segment_seconds=min_segment_seconds,
        )

    elif strategy == "raw":
        return RawByteSplitter(max_segment_bytes=max_segment_bytes, estimator=estimator)

    else:
        raise ValueError(f"不支持的切分策略: {strategy}，可选: {' / '.join(SPLIT_STRATEGIES)}")


def split_audio(
    payload: bytes,
    mime_type: str = "",
    splitter: Optional[AudioSplitter] = None,
    fallback: Optional[AudioSplitter] = None,
) -> AudioSplitResult:
    """
    切分音频，解码失败时降级为按字节切分

    不抛出异常: 两种方式都失败时返回带 error 的结果

    :param payload: 完整音频字节
    :param mime_type: 格式标识
    :param splitter: 首选切分器，默认 SampleAccurateSplitter
    :param fallback: 降级切分器，默认与首选切分器同上限的 RawByteSplitter
    :return: AudioSplitResult
    """
    if not payload:
        return AudioSplitResult(error="音频为空，无法切分")

    splitter = splitter or SampleAccurateSplitter()
    if fallback is None:
        fallback = RawByteSplitter(max_segment_bytes=splitter.max_segment_bytes)

    try:
        result = splitter.split(payload, mime_type)
        logger.info(f"[Splitter] {splitter.name()} 切分完成: {len(result.segments)} 段")
        return result
    except AudioDecodeError as exc:
        logger.warning(f"[Splitter] 解码切分失败，降级为 {fallback.name()}: {exc}")

    try:
        result = fallback.split(payload, mime_type)
        logger.info(f"[Splitter] {fallback.name()} 切分完成: {len(result.segments)} 段")
        return result
    except Exception as exc:
        logger.error(f"[Splitter] 降级切分失败: {exc}", exc_info=True)
        return AudioSplitResult(error=f"音频切分失败: {exc}")
