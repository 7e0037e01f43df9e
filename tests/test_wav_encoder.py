import io
import struct
import wave

import numpy as np
import pytest
import soundfile as sf

from scribe_audio.splitters.wav_encoder import WAV_HEADER_SIZE, build_wav_header, encode_wav


def test_header_fields() -> None:
    header = build_wav_header(num_channels=2, sample_rate=44100, num_frames=100)
    assert len(header) == WAV_HEADER_SIZE

    fields = struct.unpack("<4sI4s4sIHHIIHH4sI", header)
    assert fields == (
        b"RIFF",
        36 + 400,
        b"WAVE",
        b"fmt ",
        16,
        1,
        2,
        44100,
        44100 * 4,
        4,
        16,
        b"data",
        400,
    )


def test_header_is_deterministic() -> None:
    samples = np.zeros((50, 1), dtype=np.float32)
    first = encode_wav(samples, 16000)
    second = encode_wav(samples.copy(), 16000)
    assert first[:WAV_HEADER_SIZE] == second[:WAV_HEADER_SIZE]
    assert first == second


def test_samples_are_interleaved_clipped_and_quantized() -> None:
    samples = np.array([[1.5, -2.0], [0.5, -0.5]], dtype=np.float32)
    data = encode_wav(samples, 8000)
    values = np.frombuffer(data[WAV_HEADER_SIZE:], dtype="<i2").tolist()
    assert values == [32767, -32768, 16383, -16384]


def test_round_trip_with_reference_decoders() -> None:
    rng = np.random.default_rng(7)
    samples = rng.uniform(-1.0, 1.0, size=(1000, 2)).astype(np.float32)
    data = encode_wav(samples, 22050)

    with wave.open(io.BytesIO(data), "rb") as wf:
        assert wf.getnchannels() == 2
        assert wf.getframerate() == 22050
        assert wf.getsampwidth() == 2
        assert wf.getnframes() == 1000

    decoded, sample_rate = sf.read(io.BytesIO(data), dtype="float32", always_2d=True)
    assert sample_rate == 22050
    assert decoded.shape == samples.shape
    np.testing.assert_allclose(decoded, samples, atol=3 / 32768)


def test_mono_vector_is_accepted() -> None:
    data = encode_wav(np.zeros(10, dtype=np.float32), 8000)
    assert len(data) == WAV_HEADER_SIZE + 20


@pytest.mark.parametrize(
    "samples, sample_rate",
    [
        (np.zeros((10, 0), dtype=np.float32), 8000),
        (np.zeros((10, 1), dtype=np.float32), 0),
        (np.zeros((2, 2, 2), dtype=np.float32), 8000),
    ],
)
def test_invalid_parameters_fail_fast(samples: np.ndarray, sample_rate: int) -> None:
    with pytest.raises(ValueError):
        encode_wav(samples, sample_rate)


def test_only_16_bit_is_supported() -> None:
    with pytest.raises(ValueError):
        build_wav_header(num_channels=1, sample_rate=8000, num_frames=1, bit_depth=24)
