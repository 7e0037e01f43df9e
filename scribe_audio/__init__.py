"""
ScribeAudio - 长录音切分与顺序转写服务
"""
from fastapi import FastAPI


def create_app() -> FastAPI:
    from scribe_audio.routers import transcribe

    app = FastAPI(
        title="ScribeAudio",
        description="长录音转写 API — 超过 25MB 的录音自动切分，按顺序逐段转写后合并",
        version="0.1.0",
    )
    app.include_router(transcribe.router, prefix="/api")
    return app
