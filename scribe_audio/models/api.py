"""
转写 API 请求 / 响应模型 (Pydantic)
"""
from typing import List

from pydantic import BaseModel


class TranscribeResponse(BaseModel):
    """转写结果"""
    success: bool = True
    transcript: str
    duration: float
    segmented: bool                     # 是否经过切分
    file_size: str                      # 可读文件大小，如 "40 MB"
    errors: List[str] = []              # 失败片段的错误信息


class TranscribeStatusResponse(BaseModel):
    """转写服务状态"""
    success: bool = True
    message: str
    model: str
    provider: str
    supported_formats: List[str]
    max_segment_size: str
    max_upload_size: str
    splitting_enabled: bool
    split_strategy: str
    has_groq_key: bool
