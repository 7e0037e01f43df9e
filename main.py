"""
ScribeAudio — 长录音切分与顺序转写服务

启动命令:
    python main.py
    或
    uvicorn main:app --host 0.0.0.0 --port 8900 --reload
"""
import logging

import uvicorn

from scribe_audio import create_app
from scribe_audio.config import settings

# 配置日志
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-7s │ %(name)s │ %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger("scribe_audio")

app = create_app()

if __name__ == "__main__":
    logger.info(f"🚀 ScribeAudio 启动中 http://{settings.host}:{settings.port}")
    logger.info(f"📖 API 文档: http://127.0.0.1:{settings.port}/docs")
    logger.info(f"🎙️ 转写: {settings.transcriber_type} / {settings.transcribe_model}")
    logger.info(f"✂️ 切分: strategy={settings.split_strategy}, max_segment_bytes={settings.max_segment_bytes}")

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        reload=False,
    )
