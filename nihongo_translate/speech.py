"""Boundaries to speech-to-text and text-to-speech collaborators.

Recognition is consumed as a finite stream of events; synthesis is a single
awaited call that resolves to a named outcome.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator
from dataclasses import dataclass
from enum import Enum
import logging
from typing import Protocol

from nihongo_translate.languages import speech_locale

logger = logging.getLogger(__name__)


class SpeechEventKind(Enum):
    START = "start"
    RESULT = "result"
    ERROR = "error"
    END = "end"


@dataclass(frozen=True, slots=True)
class SpeechEvent:
    kind: SpeechEventKind
    transcript: str | None = None
    error: str | None = None


@dataclass(frozen=True, slots=True)
class TranscriptOutcome:
    transcript: str | None
    error: str | None = None


class SpeechRecognizer(Protocol):
    def listen(self, locale: str) -> AsyncIterator[SpeechEvent]: ...


class SpeechSynthesizer(Protocol):
    async def speak(self, text: str, locale: str) -> None: ...


class SpeechOutcome(Enum):
    COMPLETED = "completed"
    NOTHING_TO_SPEAK = "nothing_to_speak"
    FAILED = "failed"


async def capture_transcript(events: AsyncIterable[SpeechEvent]) -> TranscriptOutcome:
    transcript: str | None = None
    async for event in events:
        if event.kind is SpeechEventKind.RESULT and event.transcript:
            transcript = event.transcript
        elif event.kind is SpeechEventKind.ERROR:
            logger.warning("Speech recognition error: %s", event.error)
            return TranscriptOutcome(transcript=None, error=event.error or "unknown")
        elif event.kind is SpeechEventKind.END:
            break
    return TranscriptOutcome(transcript=transcript)


async def recognize(recognizer: SpeechRecognizer, language: str) -> TranscriptOutcome:
    return await capture_transcript(recognizer.listen(speech_locale(language)))


async def speak_text(
    synthesizer: SpeechSynthesizer, text: str, language: str
) -> SpeechOutcome:
    if not text.strip():
        return SpeechOutcome.NOTHING_TO_SPEAK
    try:
        await synthesizer.speak(text, speech_locale(language))
    except Exception as exc:
        logger.warning("Speech synthesis failed: %s", exc)
        return SpeechOutcome.FAILED
    return SpeechOutcome.COMPLETED
