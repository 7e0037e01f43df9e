"""
片段顺序转写 Pipeline

逐段串行调用转写函数: 第 i+1 段在第 i 段结束后才开始，
单段失败只记录错误并以占位文本代替，不中断整体流程
"""
import logging
from typing import Callable, Sequence

from scribe_audio.models.audio import AudioSegment
from scribe_audio.models.transcript import SegmentProcessingResult, SegmentTranscript
from scribe_audio.utils.audio_format import format_file_size

logger = logging.getLogger(__name__)

SEGMENT_SEPARATOR = "\n\n"

# (payload, index) -> text，不得修改 payload
SegmentTranscribeFn = Callable[[bytes, int], str]


def error_placeholder(index: int) -> str:
    """失败片段在合并文本中的占位符（1 起始编号）"""
    return f"[Error processing segment {index + 1}]"


def process_audio_segments(
    segments: Sequence[AudioSegment],
    transcribe: SegmentTranscribeFn,
) -> SegmentProcessingResult:
    """
    顺序转写所有片段并按 index 合并

    取消与超时由 transcribe 自行负责；本函数不会因片段失败而抛出异常

    :param segments: 切分得到的片段
    :param transcribe: 单段转写函数
    :return: SegmentProcessingResult
    """
    results: list[SegmentTranscript] = []
    errors: list[str] = []
    total = len(segments)

    for segment in segments:
        logger.info(
            f"[Pipeline] 处理片段 {segment.index + 1}/{total} "
            f"({format_file_size(segment.size)})"
        )
        try:
            transcript = transcribe(segment.payload, segment.index)
        except Exception as exc:
            message = str(exc) or type(exc).__name__
            logger.error(f"[Pipeline] 片段 {segment.index + 1} 转写失败: {message}")
            errors.append(f"Segment {segment.index + 1}: {message}")
            results.append(
                SegmentTranscript(
                    index=segment.index,
                    transcript=error_placeholder(segment.index),
                    duration=segment.duration,
                    error=message,
                )
            )
            continue

        results.append(
            SegmentTranscript(
                index=segment.index,
                transcript=transcript,
                duration=segment.duration,
            )
        )

    results.sort(key=lambda r: r.index)
    combined = SEGMENT_SEPARATOR.join(r.transcript for r in results)

    logger.info(
        f"[Pipeline] 完成: {total} 段, 失败 {len(errors)} 段, 合并文本 {len(combined)} 字"
    )

    return SegmentProcessingResult(
        combined_transcript=combined,
        segments=results,
        total_duration=sum(s.duration for s in segments),
        errors=errors,
    )
