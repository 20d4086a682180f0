"""Unit tests for the saga runner."""

import pytest

from eshop.application.saga import Saga, SagaStep, StepStatus


class Boom(Exception):
    pass


def _recorder():
    calls: list[str] = []

    def step(name: str, fail: bool = False, fail_compensation: bool = False) -> SagaStep:
        def action():
            calls.append(f"do {name}")
            if fail:
                raise Boom(name)

        def compensation():
            calls.append(f"undo {name}")
            if fail_compensation:
                raise Boom(f"undo {name}")

        return SagaStep(name=name, action=action, compensation=compensation)

    return calls, step


class TestSagaHappyPath:

    def test_runs_all_steps_in_order(self):
        calls, step = _recorder()
        log = Saga("test", [step("a"), step("b"), step("c")]).execute()

        assert calls == ["do a", "do b", "do c"]
        assert [e.status for e in log.entries] == [StepStatus.COMPLETED] * 3
        assert [e.step for e in log.entries] == [1, 2, 3]


class TestSagaCompensation:

    def test_compensates_completed_steps_in_reverse(self):
        calls, step = _recorder()
        saga = Saga("test", [step("a"), step("b"), step("c", fail=True), step("d")])

        with pytest.raises(Boom, match="c"):
            saga.execute()

        assert calls == ["do a", "do b", "do c", "undo b", "undo a"]

    def test_failed_step_is_not_compensated(self):
        calls, step = _recorder()
        with pytest.raises(Boom):
            Saga("test", [step("a", fail=True)]).execute()
        assert calls == ["do a"]

    def test_identical_steps_are_each_compensated_once(self):
        calls, step = _recorder()
        same = step("a")
        with pytest.raises(Boom):
            Saga("test", [same, same, step("b", fail=True)]).execute()
        assert calls.count("undo a") == 2

    def test_steps_without_compensation_are_skipped(self):
        calls, step = _recorder()
        plain = SagaStep(name="plain", action=lambda: calls.append("do plain"))
        with pytest.raises(Boom):
            Saga("test", [step("a"), plain, step("b", fail=True)]).execute()
        assert calls == ["do a", "do plain", "do b", "undo a"]

    def test_failed_compensation_does_not_stop_the_others(self):
        calls, step = _recorder()
        saga = Saga(
            "test",
            [step("a"), step("b", fail_compensation=True), step("c", fail=True)],
        )

        with pytest.raises(Boom, match="^c$"):
            saga.execute()

        assert calls[-2:] == ["undo b", "undo a"]
        failed = saga.log.failed_compensations
        assert [e.action for e in failed] == ["b"]
        assert failed[0].error == "undo b"

    def test_log_records_failure_and_compensations(self):
        _, step = _recorder()
        saga = Saga("test", [step("a"), step("b", fail=True)])

        with pytest.raises(Boom):
            saga.execute()

        entries = saga.log.entries
        assert [(e.action, e.compensating, e.status) for e in entries] == [
            ("a", False, StepStatus.COMPLETED),
            ("b", False, StepStatus.FAILED),
            ("a", True, StepStatus.COMPLETED),
        ]
        assert entries[1].error == "b"
