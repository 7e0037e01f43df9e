"""
音频转写结果数据模型
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class TranscriptionOutput:
    """单次转写调用的结果"""
    text: str
    duration: float = 0.0
    language: Optional[str] = None


@dataclass
class SegmentTranscript:
    """单个片段的转写结果"""
    index: int
    transcript: str
    duration: float
    error: Optional[str] = None


@dataclass
class SegmentProcessingResult:
    """按顺序处理全部片段后的汇总结果"""
    combined_transcript: str
    segments: List[SegmentTranscript]
    total_duration: float
    errors: List[str] = field(default_factory=list)


@dataclass
class TranscriptionOutcome:
    """一次完整转写请求（可能经过切分）的结果"""
    transcript: str
    duration: float
    segmented: bool
    file_size: str
    segment_errors: List[str] = field(default_factory=list)
