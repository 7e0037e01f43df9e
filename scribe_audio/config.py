"""
ScribeAudio 配置模块
从 .env 文件加载所有配置项，提供全局单例 settings

核心切分 / Pipeline 组件不直接读取 settings，由工厂函数显式传参
"""
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass
class Settings:
    """全局配置"""

    # 服务
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8900"))

    # 转写器类型: 目前仅支持 groq
    transcriber_type: str = os.getenv("TRANSCRIBER_TYPE", "groq")

    # Groq Whisper
    groq_api_key: str = os.getenv("GROQ_API_KEY", "")
    groq_base_url: str = os.getenv("GROQ_BASE_URL", "https://api.groq.com/openai/v1")
    transcribe_model: str = os.getenv("TRANSCRIBE_MODEL", "whisper-large-v3-turbo")
    transcribe_language: str = os.getenv("TRANSCRIBE_LANGUAGE", "nl")
    transcribe_temperature: float = float(os.getenv("TRANSCRIBE_TEMPERATURE", "0.0"))
    transcribe_max_attempts: int = int(os.getenv("TRANSCRIBE_MAX_ATTEMPTS", "3"))
    transcribe_timeout: float = float(os.getenv("TRANSCRIBE_TIMEOUT", "120"))

    # 切分
    max_segment_bytes: int = int(os.getenv("MAX_SEGMENT_BYTES", str(25 * 1024 * 1024)))
    max_upload_bytes: int = int(os.getenv("MAX_UPLOAD_BYTES", str(70 * 1024 * 1024)))
    split_strategy: str = os.getenv("SPLIT_STRATEGY", "auto")          # auto / sample / raw
    min_segment_seconds: float = float(os.getenv("MIN_SEGMENT_SECONDS", "30"))


settings = Settings()
