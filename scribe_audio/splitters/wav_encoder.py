"""
将浮点采样编码为 16-bit PCM WAV

手工写入 44 字节的 RIFF/WAVE 头，不依赖外部编码器
"""
import struct

import numpy as np

WAV_HEADER_SIZE = 44
PCM_FORMAT_TAG = 1
SUPPORTED_BIT_DEPTH = 16


def build_wav_header(num_channels: int, sample_rate: int, num_frames: int, bit_depth: int = 16) -> bytes:
    """
    构造标准 PCM WAV 头

    :param num_channels: 声道数
    :param sample_rate: 采样率 (Hz)
    :param num_frames: 每声道采样帧数
    :param bit_depth: 位深，仅支持 16
    :return: 44 字节的头部
    """
    if num_channels <= 0:
        raise ValueError(f"声道数必须大于 0: {num_channels}")
    if sample_rate <= 0:
        raise ValueError(f"采样率必须大于 0: {sample_rate}")
    if bit_depth != SUPPORTED_BIT_DEPTH:
        raise ValueError(f"仅支持 16-bit PCM，收到 {bit_depth}")
    if num_frames < 0:
        raise ValueError(f"帧数不能为负: {num_frames}")

    block_align = num_channels * bit_depth // 8
    byte_rate = sample_rate * block_align
    data_size = num_frames * block_align

    return struct.pack(
        "<4sI4s4sIHHIIHH4sI",
        b"RIFF",
        WAV_HEADER_SIZE - 8 + data_size,
        b"WAVE",
        b"fmt ",
        16,                 # fmt chunk 长度
        PCM_FORMAT_TAG,
        num_channels,
        sample_rate,
        byte_rate,
        block_align,
        bit_depth,
        b"data",
        data_size,
    )


def quantize_int16(samples: np.ndarray) -> np.ndarray:
    """裁剪到 [-1, 1] 后量化为 int16 (负半轴 * 0x8000，正半轴 * 0x7FFF)"""
    clipped = np.clip(np.asarray(samples, dtype=np.float32), -1.0, 1.0)
    scaled = np.where(clipped < 0, clipped * 0x8000, clipped * 0x7FFF)
    return scaled.astype("<i2")


def encode_wav(samples: np.ndarray, sample_rate: int, bit_depth: int = 16) -> bytes:
    """
    将采样编码为完整的 WAV 字节

    :param samples: 一维 (单声道) 或二维 (帧数 x 声道数) 的 float32 数组
    :param sample_rate: 采样率
    :param bit_depth: 位深，固定 16
    :return: WAV 文件字节
    """
    data = np.asarray(samples, dtype=np.float32)
    if data.ndim == 1:
        data = data[:, np.newaxis]
    if data.ndim != 2:
        raise ValueError(f"采样数组必须是一维或二维，收到 {data.ndim} 维")

    num_frames, num_channels = data.shape
    header = build_wav_header(num_channels, sample_rate, num_frames, bit_depth)

    # C 顺序展开即为逐帧交错的声道数据
    interleaved = quantize_int16(data).tobytes(order="C")
    return header + interleaved
