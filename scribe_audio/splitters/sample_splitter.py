"""
基于解码的精确切分器

用 soundfile (libsndfile) 将整段音频解码为浮点采样，
按采样帧切片后重新编码为 WAV，片段时长精确到采样
"""
import io
import logging

import numpy as np
import soundfile as sf

from scribe_audio.models.audio import AudioSegment, AudioSplitResult
from scribe_audio.splitters.base import MAX_FILE_SIZE, AudioDecodeError, AudioSplitter
from scribe_audio.splitters.wav_encoder import WAV_HEADER_SIZE, encode_wav
from scribe_audio.utils.audio_format import format_duration, format_file_size

logger = logging.getLogger(__name__)

BYTES_PER_SAMPLE = 2


class SampleAccurateSplitter(AudioSplitter):
    """
    解码 → 按帧切片 → 重新编码为 16-bit WAV

    片段时长取以下两者的较小值:
    - 按原始文件大小比例换算: max_bytes / 原始字节数 * 总时长
    - 重新编码后 WAV 不超过 max_bytes 的最长时长
    并且不低于 min(min_segment_seconds, 总时长 / 10)，避免产生大量过短片段
    """

    def __init__(self, max_segment_bytes: int = MAX_FILE_SIZE, min_segment_seconds: float = 30.0):
        super().__init__(max_segment_bytes)
        self.min_segment_seconds = min_segment_seconds

    def name(self) -> str:
        return "sample"

    def split(self, payload: bytes, mime_type: str = "") -> AudioSplitResult:
        samples, sample_rate = self._decode(payload)

        total_frames, num_channels = samples.shape
        total_duration = total_frames / sample_rate
        frames_per_segment = self._frames_per_segment(
            payload_size=len(payload),
            total_frames=total_frames,
            sample_rate=sample_rate,
            num_channels=num_channels,
        )

        logger.info(
            f"[Splitter] 解码完成: {format_file_size(len(payload))}, "
            f"时长={format_duration(total_duration)}, 采样率={sample_rate}, 声道={num_channels}, "
            f"每段 {frames_per_segment / sample_rate:.1f}s"
        )

        segments: list[AudioSegment] = []
        start_frame = 0
        while start_frame < total_frames:
            end_frame = min(start_frame + frames_per_segment, total_frames)
            wav_bytes = encode_wav(samples[start_frame:end_frame], sample_rate)

            start_time = start_frame / sample_rate
            end_time = end_frame / sample_rate
            segment = AudioSegment(
                payload=wav_bytes,
                index=len(segments),
                duration=end_time - start_time,
                size=len(wav_bytes),
                start_time=start_time,
                end_time=end_time,
                mime_type="audio/wav",
            )
            if segment.size > self.max_segment_bytes:
                # 最短时长的片段编码后仍超限（高采样率 / 多声道）
                logger.warning(
                    f"[Splitter] 片段 {segment.index + 1} 超出上限: "
                    f"{format_file_size(segment.size)} > {format_file_size(self.max_segment_bytes)}"
                )
            segments.append(segment)
            start_frame = end_frame

        return AudioSplitResult(
            segments=segments,
            total_size=sum(s.size for s in segments),
            total_duration=total_duration,
        )

    @staticmethod
    def _decode(payload: bytes) -> tuple[np.ndarray, int]:
        """解码为 (帧数 x 声道数) 的 float32 数组；解码会话在任何情况下都会关闭"""
        try:
            with sf.SoundFile(io.BytesIO(payload)) as audio_file:
                sample_rate = audio_file.samplerate
                samples = audio_file.read(dtype="float32", always_2d=True)
        except (RuntimeError, TypeError, ValueError) as exc:
            raise AudioDecodeError(f"音频解码失败: {exc}") from exc

        if sample_rate <= 0 or samples.shape[0] == 0 or samples.shape[1] == 0:
            raise AudioDecodeError("音频解码失败: 不包含任何采样")
        return samples, sample_rate

    def _frames_per_segment(
        self,
        payload_size: int,
        total_frames: int,
        sample_rate: int,
        num_channels: int,
    ) -> int:
        block_align = num_channels * BYTES_PER_SAMPLE
        ratio_frames = int(self.max_segment_bytes / payload_size * total_frames)
        encoded_limit_frames = (self.max_segment_bytes - WAV_HEADER_SIZE) // block_align
        target_frames = min(ratio_frames, encoded_limit_frames)

        total_duration = total_frames / sample_rate
        min_seconds = min(self.min_segment_seconds, total_duration / 10)
        min_frames = int(round(min_seconds * sample_rate))

        return max(target_frames, min_frames, 1)
