"""
Processing state machine for one dictation session.

  IDLE -> UPLOADING -> TRANSCRIBING -> REFINING -> COMPLETED
  UPLOADING | TRANSCRIBING | REFINING -> ERROR
  COMPLETED | ERROR -> IDLE (reset)

begin_upload() hands out a submission token; every later transition must
present it. reset() invalidates outstanding tokens, so results of calls that
were in flight during a reset are dropped instead of moving the machine away
from IDLE.

Only one submission runs at a time. That is enforced by the UI (the upload
control is disabled while busy), not here.
"""
import logging
from typing import Optional

from core.models import ProcessingState, ProcessingStatus, StructuredReport

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Ocurrió un error durante el procesamiento."

S = ProcessingStatus


class InvalidTransitionError(RuntimeError):
    pass


class ProcessingStateMachine:
    def __init__(self):
        self._state = ProcessingState()
        self._generation = 0
        self.history: list[ProcessingStatus] = [S.IDLE]

    @property
    def state(self) -> ProcessingState:
        return self._state

    @property
    def status(self) -> ProcessingStatus:
        return self._state.status

    @property
    def busy(self) -> bool:
        return self._state.status.in_flight

    def is_current(self, token: int) -> bool:
        return token == self._generation

    # ── transitions ──────────────────────────────────────────────────────

    def begin_upload(self, audio_handle: Optional[str]) -> int:
        """IDLE -> UPLOADING. A finished session is reset first. Returns the submission token."""
        if self.status in (S.COMPLETED, S.ERROR):
            self.reset()
        if self.status is not S.IDLE:
            raise InvalidTransitionError(f"Cannot start a submission while {self.status.value}")
        self._generation += 1
        self._set(ProcessingState(status=S.UPLOADING, audio_handle=audio_handle))
        return self._generation

    def begin_transcription(self, token: int) -> bool:
        return self._advance(token, S.UPLOADING, S.TRANSCRIBING)

    def begin_refinement(self, token: int) -> bool:
        return self._advance(token, S.TRANSCRIBING, S.REFINING)

    def complete(self, token: int, report: StructuredReport) -> bool:
        return self._advance(token, S.REFINING, S.COMPLETED, report=report)

    def fail(self, token: int, message: Optional[str]) -> bool:
        """Any in-flight state -> ERROR. No partial report is kept."""
        if not self.is_current(token):
            logger.info("Discarding stale failure for submission %d: %s", token, message)
            return False
        if not self.busy:
            raise InvalidTransitionError(f"Cannot fail from {self.status.value}")
        self._set(self._state.evolve(status=S.ERROR, error=message or DEFAULT_ERROR_MESSAGE, report=None))
        return True

    def reset(self) -> ProcessingState:
        """Any state -> IDLE. Clears audio handle, error and report; idempotent."""
        self._generation += 1
        self._state = ProcessingState()
        self.history = [S.IDLE]
        logger.debug("State reset (generation %d)", self._generation)
        return self._state

    # ── internals ────────────────────────────────────────────────────────

    def _advance(self, token: int, source: ProcessingStatus, target: ProcessingStatus, **changes) -> bool:
        if not self.is_current(token):
            logger.info("Discarding stale %s result for submission %d", target.value, token)
            return False
        if self.status is not source:
            raise InvalidTransitionError(f"{self.status.value} -> {target.value} is not allowed")
        self._set(self._state.evolve(status=target, **changes))
        return True

    def _set(self, state: ProcessingState) -> None:
        logger.info("State %s -> %s", self._state.status.value, state.status.value)
        self._state = state
        self.history.append(state.status)
