"""
音频切分结果数据模型
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class AudioSegment:
    """原始录音的一个切片"""
    payload: bytes          # 片段字节（完整容器或原始字节切片）
    index: int              # 从 0 开始的连续序号
    duration: float         # 时长（秒）
    size: int               # payload 字节数
    start_time: float       # 相对原始录音的开始时间（秒）
    end_time: float         # 相对原始录音的结束时间（秒）
    mime_type: str = "audio/wav"


@dataclass
class AudioSplitResult:
    """一次切分的结果"""
    segments: List[AudioSegment] = field(default_factory=list)
    total_size: int = 0
    total_duration: float = 0.0
    error: Optional[str] = None     # 整体失败时的错误信息
