import pytest

from core.models import ProcessingStatus as S, StructuredReport
from core.state_machine import DEFAULT_ERROR_MESSAGE, InvalidTransitionError, ProcessingStateMachine

REPORT = StructuredReport(original_text="texto", findings="F", diagnosis="D", plan="P")


def _drive_to(machine: ProcessingStateMachine, target: S) -> int:
    token = machine.begin_upload("/tmp/a.wav")
    if target is S.UPLOADING:
        return token
    machine.begin_transcription(token)
    if target is S.TRANSCRIBING:
        return token
    machine.begin_refinement(token)
    if target is S.REFINING:
        return token
    if target is S.COMPLETED:
        machine.complete(token, REPORT)
    elif target is S.ERROR:
        machine.fail(token, "boom")
    return token


def test_starts_idle(machine):
    assert machine.state.status is S.IDLE
    assert machine.state.report is None
    assert machine.state.error is None
    assert machine.state.audio_handle is None


def test_happy_path_order(machine):
    _drive_to(machine, S.COMPLETED)
    assert machine.history == [S.IDLE, S.UPLOADING, S.TRANSCRIBING, S.REFINING, S.COMPLETED]
    assert machine.state.report == REPORT
    assert machine.state.audio_handle == "/tmp/a.wav"


@pytest.mark.parametrize("source", [S.UPLOADING, S.TRANSCRIBING, S.REFINING])
def test_fail_from_in_flight_states(machine, source):
    token = _drive_to(machine, source)
    assert machine.fail(token, "quota exceeded")
    assert machine.state.status is S.ERROR
    assert machine.state.error == "quota exceeded"
    assert machine.state.report is None


def test_fail_without_message_uses_default(machine):
    token = _drive_to(machine, S.TRANSCRIBING)
    machine.fail(token, "")
    assert machine.state.error == DEFAULT_ERROR_MESSAGE


@pytest.mark.parametrize("source", list(S))
def test_reset_from_any_state(machine, source):
    if source is not S.IDLE:
        _drive_to(machine, source)
    state = machine.reset()
    assert state.status is S.IDLE
    assert state.report is None
    assert state.error is None
    assert state.audio_handle is None
    assert machine.reset() == state


@pytest.mark.parametrize("source", [S.UPLOADING, S.TRANSCRIBING, S.REFINING])
def test_stale_token_is_ignored_after_reset(machine, source):
    token = _drive_to(machine, source)
    machine.reset()

    assert not machine.begin_transcription(token)
    assert not machine.begin_refinement(token)
    assert not machine.complete(token, REPORT)
    assert not machine.fail(token, "late")
    assert machine.state.status is S.IDLE
    assert machine.history == [S.IDLE]


def test_skipping_a_phase_is_rejected(machine):
    token = machine.begin_upload(None)
    with pytest.raises(InvalidTransitionError):
        machine.begin_refinement(token)
    with pytest.raises(InvalidTransitionError):
        machine.complete(token, REPORT)


def test_cannot_start_while_busy(machine):
    _drive_to(machine, S.TRANSCRIBING)
    with pytest.raises(InvalidTransitionError):
        machine.begin_upload("/tmp/b.wav")


@pytest.mark.parametrize("terminal", [S.COMPLETED, S.ERROR])
def test_new_submission_resets_finished_session(machine, terminal):
    old = _drive_to(machine, terminal)
    new = machine.begin_upload("/tmp/b.wav")
    assert new != old
    assert machine.state.status is S.UPLOADING
    assert machine.state.report is None and machine.state.error is None
    assert machine.history == [S.IDLE, S.UPLOADING]


def test_fail_after_completion_is_rejected(machine):
    token = _drive_to(machine, S.COMPLETED)
    with pytest.raises(InvalidTransitionError):
        machine.fail(token, "too late")


def test_module_source_compiles_without_warnings():
    import warnings
    from pathlib import Path

    import core.state_machine as module

    source = Path(module.__file__).read_text(encoding="utf-8")
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        compile(source, module.__file__, "exec")
