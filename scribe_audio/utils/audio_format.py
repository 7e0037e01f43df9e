"""
音频格式相关工具: 文件大小 / 时长格式化、MIME 类型校验
"""
SUPPORTED_AUDIO_FORMATS: list[str] = [
    "audio/m4a",
    "audio/x-m4a",
    "audio/mp4",
    "audio/wav",
    "audio/wave",
    "audio/mpeg",
    "audio/mp3",
    "audio/webm",
    "audio/ogg",
    "audio/flac",
    "audio/aac",
]

# 按优先级排列: 先匹配的先生效
_EXTENSION_PATTERNS: list[tuple[tuple[str, ...], str]] = [
    (("m4a",), "m4a"),
    (("mp4",), "mp4"),
    (("mpeg", "mp3"), "mp3"),
    (("webm",), "webm"),
    (("ogg",), "ogg"),
    (("flac",), "flac"),
    (("wav", "wave"), "wav"),
]

_SIZE_UNITS = ["B", "KB", "MB", "GB"]


def format_file_size(num_bytes: int) -> str:
    """字节数转为可读字符串，如 25 MB / 1.5 KB"""
    if num_bytes <= 0:
        return "0 B"

    i = 0
    size = float(num_bytes)
    while size >= 1024 and i < len(_SIZE_UNITS) - 1:
        size /= 1024
        i += 1
    value = f"{size:.1f}".rstrip("0").rstrip(".")
    return f"{value} {_SIZE_UNITS[i]}"


def format_duration(seconds: float) -> str:
    """秒数转为 M:SS"""
    minutes = int(seconds // 60)
    remaining = int(seconds % 60)
    return f"{minutes}:{remaining:02d}"


def is_supported_audio_format(mime_type: str | None) -> bool:
    """
    判断 MIME 类型是否受支持

    使用子串匹配，兼容 audio/webm;codecs=opus 这类带参数的类型
    """
    if not mime_type:
        return False
    lowered = mime_type.lower()
    return any(fmt in lowered for fmt in SUPPORTED_AUDIO_FORMATS)


def extension_for_mime(mime_type: str | None) -> str:
    """根据 MIME 类型推断上传文件扩展名（默认 m4a）"""
    lowered = (mime_type or "").lower()
    for needles, ext in _EXTENSION_PATTERNS:
        if any(n in lowered for n in needles):
            return ext
    return "m4a"
