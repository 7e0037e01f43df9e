from types import SimpleNamespace

import pytest

from scribe_audio.transcribers.base import TranscriptionError
from scribe_audio.transcribers.groq_transcriber import GroqWhisperTranscriber


class _StatusError(Exception):
    def __init__(self, status_code: int, message: str = "api error"):
        super().__init__(message)
        self.status_code = status_code


class _FakeTranscriptions:
    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls: list[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _transcriber(outcomes, **kwargs):
    sleeps: list[float] = []
    transcriber = GroqWhisperTranscriber(api_key="gsk_test", sleep=sleeps.append, **kwargs)
    fake = _FakeTranscriptions(outcomes)
    transcriber.client = SimpleNamespace(audio=SimpleNamespace(transcriptions=fake))
    return transcriber, fake, sleeps


def test_transcribe_sends_named_file_and_options() -> None:
    response = SimpleNamespace(text="  Goedemorgen, hoe gaat het?  ", duration=12.5, language="dutch")
    transcriber, fake, sleeps = _transcriber([response], prompt="fysiotherapie intake")

    output = transcriber.transcribe(b"audio-bytes", "audio/webm;codecs=opus")

    assert output.text == "Goedemorgen, hoe gaat het?"
    assert output.duration == 12.5
    assert output.language == "dutch"
    assert sleeps == []

    kwargs = fake.calls[0]
    assert kwargs["file"] == ("audio.webm", b"audio-bytes", "audio/webm;codecs=opus")
    assert kwargs["model"] == "whisper-large-v3-turbo"
    assert kwargs["language"] == "nl"
    assert kwargs["response_format"] == "verbose_json"
    assert kwargs["temperature"] == 0.0
    assert kwargs["prompt"] == "fysiotherapie intake"


def test_transient_errors_are_retried_with_backoff() -> None:
    transcriber, fake, sleeps = _transcriber(
        [_StatusError(429), ConnectionError("reset"), SimpleNamespace(text="ok")]
    )

    output = transcriber.transcribe(b"x", "audio/wav")

    assert output.text == "ok"
    assert len(fake.calls) == 3
    assert sleeps == [2, 4]


@pytest.mark.parametrize("status", [401, 403])
def test_auth_errors_are_not_retried(status: int) -> None:
    transcriber, fake, sleeps = _transcriber([_StatusError(status, "denied")])

    with pytest.raises(TranscriptionError) as exc_info:
        transcriber.transcribe(b"x", "audio/wav")

    assert exc_info.value.status_code == status
    assert "denied" in str(exc_info.value)
    assert len(fake.calls) == 1
    assert sleeps == []


def test_gives_up_after_max_attempts() -> None:
    transcriber, fake, sleeps = _transcriber(
        [_StatusError(500), _StatusError(502), _StatusError(503)]
    )

    with pytest.raises(TranscriptionError) as exc_info:
        transcriber.transcribe(b"x", "audio/mpeg")

    assert exc_info.value.status_code == 503
    assert len(fake.calls) == 3
    assert sleeps == [2, 4]
    assert fake.calls[0]["file"][0] == "audio.mp3"
