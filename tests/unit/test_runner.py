"""Tests for the StepRunner — ordering, halting, cancellation and cleanup."""

from __future__ import annotations

import pytest

from boxcloud.core.runner import InvalidRunnerTransitionError, StepRunner
from boxcloud.core.state import PublishState
from boxcloud.errors import BoxCloudError, RegistryError
from boxcloud.models.runs import RunnerState, StepAction
from boxcloud.steps.base import BaseStep


class ScriptedStep(BaseStep):
    """Step whose behaviour is fixed at construction; logs into a shared journal."""

    def __init__(
        self,
        name: str,
        journal: list[str],
        action: StepAction = StepAction.CONTINUE,
        error: BoxCloudError | None = None,
        cleanup_error: Exception | None = None,
        on_execute=None,
    ) -> None:
        self._name = name
        self._journal = journal
        self._action = action
        self._error = error
        self._cleanup_error = cleanup_error
        self._on_execute = on_execute

    @property
    def step_id(self) -> str:
        return self._name

    @property
    def display_name(self) -> str:
        return self._name.title()

    def execute(self, state: PublishState) -> StepAction:
        self._journal.append(f"run:{self._name}")
        if self._on_execute is not None:
            self._on_execute()
        if self._error is not None:
            raise self._error
        return self._action

    def cleanup(self, state: PublishState) -> None:
        self._journal.append(f"cleanup:{self._name}")
        if self._cleanup_error is not None:
            raise self._cleanup_error


def _steps(journal: list[str], *names: str, **overrides) -> list[ScriptedStep]:
    return [ScriptedStep(name, journal, **overrides.get(name, {})) for name in names]


class TestStepRunner:
    def test_runs_all_steps_in_order(self, make_state):
        journal: list[str] = []
        runner = StepRunner(_steps(journal, "a", "b", "c"))
        report = runner.run(make_state())

        assert report.state == RunnerState.COMPLETED
        assert report.error is None
        assert report.started_steps == ["a", "b", "c"]
        assert journal[:3] == ["run:a", "run:b", "run:c"]
        assert runner.state == RunnerState.COMPLETED

    def test_cleanup_in_reverse_start_order(self, make_state):
        journal: list[str] = []
        report = StepRunner(_steps(journal, "a", "b", "c")).run(make_state())

        assert journal[3:] == ["cleanup:c", "cleanup:b", "cleanup:a"]
        assert report.cleaned_steps == ["c", "b", "a"]

    def test_halt_stops_later_steps(self, make_state):
        journal: list[str] = []
        steps = _steps(journal, "a", "b", "c", b={"action": StepAction.HALT})
        state = make_state()
        report = StepRunner(steps).run(state)

        assert report.state == RunnerState.HALTED
        assert report.halted_at == "b"
        assert "run:c" not in journal
        assert journal == ["run:a", "run:b", "cleanup:b", "cleanup:a"]
        assert state.error is None
        assert state.halted is True

    def test_error_recorded_and_halts(self, make_state):
        journal: list[str] = []
        boom = RegistryError("registry down")
        steps = _steps(journal, "a", "b", "c", b={"error": boom})
        state = make_state()
        report = StepRunner(steps).run(state)

        assert report.state == RunnerState.HALTED
        assert state.error is boom
        assert report.error == "registry down"
        assert report.started_steps == ["a", "b"]
        assert report.cleaned_steps == ["b", "a"]

    def test_cleanup_failure_does_not_become_run_error(self, make_state):
        journal: list[str] = []
        steps = _steps(
            journal, "a", "b",
            b={"cleanup_error": RuntimeError("cleanup broke")},
        )
        state = make_state()
        report = StepRunner(steps).run(state)

        assert report.state == RunnerState.COMPLETED
        assert state.error is None
        # Cleanup continues past the failing step
        assert journal[-1] == "cleanup:a"

    def test_cleanup_failure_keeps_original_error(self, make_state):
        journal: list[str] = []
        original = RegistryError("first")
        steps = _steps(
            journal, "a", "b",
            a={"cleanup_error": RuntimeError("secondary")},
            b={"error": original},
        )
        state = make_state()
        StepRunner(steps).run(state)
        assert state.error is original

    def test_cancel_before_run_starts_nothing(self, make_state):
        journal: list[str] = []
        runner = StepRunner(_steps(journal, "a", "b"))
        runner.cancel()
        state = make_state()
        report = runner.run(state)

        assert report.state == RunnerState.CANCELLED
        assert report.started_steps == []
        assert journal == []
        assert state.cancelled is True
        assert state.error is None

    def test_cancel_during_step_prevents_following_steps(self, make_state):
        journal: list[str] = []
        runner_holder: list[StepRunner] = []
        steps = _steps(
            journal, "a", "b", "c",
            b={"on_execute": lambda: runner_holder[0].cancel()},
        )
        runner = StepRunner(steps)
        runner_holder.append(runner)
        report = runner.run(make_state())

        assert report.state == RunnerState.CANCELLED
        # The in-flight step finishes; only later steps are skipped
        assert report.started_steps == ["a", "b"]
        assert "run:c" not in journal
        assert report.cleaned_steps == ["b", "a"]

    def test_unexpected_exception_still_cleans_up(self, make_state):
        journal: list[str] = []

        def _explode():
            raise ValueError("bug")

        steps = _steps(journal, "a", "b", "c", b={"on_execute": _explode})
        runner = StepRunner(steps)
        with pytest.raises(ValueError):
            runner.run(make_state())

        assert journal == ["run:a", "run:b", "cleanup:b", "cleanup:a"]
        assert runner.state == RunnerState.HALTED

    def test_runner_runs_only_once(self, make_state):
        runner = StepRunner(_steps([], "a"))
        runner.run(make_state())
        with pytest.raises(InvalidRunnerTransitionError):
            runner.run(make_state())

    def test_empty_step_list_completes(self, make_state):
        report = StepRunner([]).run(make_state())
        assert report.state == RunnerState.COMPLETED
        assert report.started_steps == []
