import pytest

from scribe_audio.models.audio import AudioSplitResult
from scribe_audio.models.transcript import TranscriptionOutput
from scribe_audio.services import transcription_service
from scribe_audio.services.transcription_service import TranscriptionService, create_transcriber
from scribe_audio.splitters.base import AudioDecodeError, AudioSplitter
from scribe_audio.splitters.raw_splitter import RawByteSplitter
from scribe_audio.splitters.sample_splitter import SampleAccurateSplitter
from scribe_audio.transcribers.base import TranscriptionError, Transcriber
from audio_fixtures import tone_wav


class FakeTranscriber(Transcriber):
    def __init__(self, fail_on: set[int] | None = None):
        self.fail_on = fail_on or set()
        self.calls: list[tuple[bytes, str]] = []

    def transcribe(self, payload: bytes, mime_type: str = "audio/wav") -> TranscriptionOutput:
        call_number = len(self.calls)
        self.calls.append((payload, mime_type))
        if call_number in self.fail_on:
            raise TranscriptionError("Groq transcription failed: 503")
        return TranscriptionOutput(text=f"deel {call_number}", duration=2.0)


class _NothingWorks(AudioSplitter):
    def name(self) -> str:
        return "nothing"

    def split(self, payload: bytes, mime_type: str = "") -> AudioSplitResult:
        raise AudioDecodeError("nope")


def test_small_payload_is_transcribed_directly() -> None:
    transcriber = FakeTranscriber()
    service = TranscriptionService(transcriber, max_segment_bytes=100)

    outcome = service.transcribe(b"x" * 100, "audio/mpeg")

    assert outcome.segmented is False
    assert outcome.transcript == "deel 0"
    assert outcome.duration == 2.0
    assert outcome.file_size == "100 B"
    assert transcriber.calls == [(b"x" * 100, "audio/mpeg")]


def test_large_payload_is_split_and_combined() -> None:
    transcriber = FakeTranscriber(fail_on={1})
    service = TranscriptionService(
        transcriber,
        splitter=RawByteSplitter(max_segment_bytes=10),
        max_segment_bytes=10,
    )

    outcome = service.transcribe(b"abcdefghij" * 2 + b"klmno", "audio/ogg")

    assert outcome.segmented is True
    assert outcome.transcript == "deel 0\n\n[Error processing segment 2]\n\ndeel 2"
    assert outcome.segment_errors == ["Segment 2: Groq transcription failed: 503"]
    assert [c[0] for c in transcriber.calls] == [b"abcdefghij", b"abcdefghij", b"klmno"]
    assert all(c[1] == "audio/ogg" for c in transcriber.calls)


def test_decodable_audio_is_sent_as_wav_segments() -> None:
    transcriber = FakeTranscriber()
    service = TranscriptionService(
        transcriber,
        splitter=SampleAccurateSplitter(max_segment_bytes=30_000),
        max_segment_bytes=30_000,
    )

    outcome = service.transcribe(tone_wav(5.0), "audio/wav")

    assert outcome.segmented is True
    assert outcome.duration == pytest.approx(5.0)
    assert len(transcriber.calls) == 3
    assert all(c[1] == "audio/wav" and c[0].startswith(b"RIFF") for c in transcriber.calls)


def test_total_split_failure_raises() -> None:
    service = TranscriptionService(
        FakeTranscriber(),
        splitter=_NothingWorks(max_segment_bytes=10),
        fallback=_NothingWorks(max_segment_bytes=10),
        max_segment_bytes=10,
    )

    with pytest.raises(TranscriptionError):
        service.transcribe(b"x" * 50, "audio/mpeg")


def test_create_transcriber_requires_api_key(monkeypatch) -> None:
    monkeypatch.setattr(transcription_service.settings, "groq_api_key", "")
    with pytest.raises(ValueError):
        create_transcriber()


def test_create_transcriber_rejects_unknown_type(monkeypatch) -> None:
    monkeypatch.setattr(transcription_service.settings, "transcriber_type", "whisper")
    with pytest.raises(ValueError):
        create_transcriber()


def test_create_transcriber_applies_overrides(monkeypatch) -> None:
    monkeypatch.setattr(transcription_service.settings, "transcriber_type", "groq")
    monkeypatch.setattr(transcription_service.settings, "groq_api_key", "gsk_test")

    transcriber = create_transcriber(language="en", prompt="knie", temperature=0.2)

    assert transcriber.language == "en"
    assert transcriber.prompt == "knie"
    assert transcriber.temperature == 0.2
