"""Tests for step ordering, skipping and failure propagation in ActionSequencer."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import pytest

from saga_cli.actions import (
    ActionSequencer,
    RecordingRenderer,
    SkipActionError,
    Step,
    StepController,
    StepState,
)

RUNNING = StepState.RUNNING
SKIPPED = StepState.SKIPPED
COMPLETED = StepState.COMPLETED
FAILED = StepState.FAILED


@dataclass
class Context:
    branch: str = ""
    visited: list[str] = field(default_factory=list)


def _titles(name: str):
    return lambda ctx: {
        RUNNING: f"running {name}",
        SKIPPED: f"skipped {name}",
        COMPLETED: f"completed {name}",
        FAILED: f"failed {name}",
    }


def _step(name: str, **kwargs) -> Step[Context]:
    async def action(ctx: Context, controller: StepController) -> None:
        ctx.visited.append(name)

    return Step(titles=kwargs.pop("titles", _titles(name)), action=kwargs.pop("action", action), **kwargs)


def _run(sequencer: ActionSequencer, context) -> None:
    asyncio.run(sequencer.run(context))


def test_completed_steps_render_running_then_completed_in_order(recorder: RecordingRenderer) -> None:
    sequencer: ActionSequencer[Context] = ActionSequencer(recorder)
    sequencer.add(_step("a"), _step("b"), _step("c"))
    ctx = Context()

    _run(sequencer, ctx)

    assert ctx.visited == ["a", "b", "c"]
    assert recorder.calls == [
        (RUNNING, "running a"),
        (COMPLETED, "completed a"),
        (RUNNING, "running b"),
        (COMPLETED, "completed b"),
        (RUNNING, "running c"),
        (COMPLETED, "completed c"),
    ]


def test_empty_sequence_renders_nothing(recorder: RecordingRenderer) -> None:
    sequencer: ActionSequencer[Context] = ActionSequencer(recorder)

    _run(sequencer, Context())

    assert recorder.calls == []


def test_add_accepts_steps_across_calls(recorder: RecordingRenderer) -> None:
    sequencer: ActionSequencer[Context] = ActionSequencer(recorder)
    sequencer.add(_step("a"))
    sequencer.add(_step("b"), _step("c"))
    ctx = Context()

    _run(sequencer, ctx)

    assert len(sequencer.steps) == 3
    assert ctx.visited == ["a", "b", "c"]


def test_skip_with_reason_renders_reason_and_run_continues(recorder: RecordingRenderer) -> None:
    async def skipping(ctx: Context, controller: StepController) -> None:
        controller.skip("nothing to do")

    sequencer: ActionSequencer[Context] = ActionSequencer(recorder)
    sequencer.add(_step("a", action=skipping), _step("b"))
    ctx = Context()

    _run(sequencer, ctx)

    assert recorder.calls == [
        (RUNNING, "running a"),
        (SKIPPED, "nothing to do"),
        (RUNNING, "running b"),
        (COMPLETED, "completed b"),
    ]
    assert ctx.visited == ["b"]


def test_skip_without_reason_falls_back_to_skipped_title(recorder: RecordingRenderer) -> None:
    async def skipping(ctx: Context, controller: StepController) -> None:
        controller.skip()

    sequencer: ActionSequencer[Context] = ActionSequencer(recorder)
    sequencer.add(_step("a", action=skipping))

    _run(sequencer, Context())

    assert recorder.calls[-1] == (SKIPPED, "skipped a")


def test_skip_without_reason_or_title_renders_empty_label(recorder: RecordingRenderer) -> None:
    async def skipping(ctx: Context, controller: StepController) -> None:
        controller.skip()

    sequencer: ActionSequencer[Context] = ActionSequencer(recorder)
    sequencer.add(Step(titles=lambda ctx: {RUNNING: "working"}, action=skipping))

    _run(sequencer, Context())

    assert recorder.calls == [(RUNNING, "working"), (SKIPPED, "")]


def test_skip_stops_the_rest_of_the_action(recorder: RecordingRenderer) -> None:
    async def skipping(ctx: Context, controller: StepController) -> None:
        controller.skip("early exit")
        ctx.visited.append("after skip")

    sequencer: ActionSequencer[Context] = ActionSequencer(recorder)
    sequencer.add(_step("a", action=skipping))
    ctx = Context()

    _run(sequencer, ctx)

    assert ctx.visited == []


def test_raising_skip_error_directly_is_treated_as_skip(recorder: RecordingRenderer) -> None:
    async def skipping(ctx: Context, controller: StepController) -> None:
        raise SkipActionError("raised by hand")

    sequencer: ActionSequencer[Context] = ActionSequencer(recorder)
    sequencer.add(_step("a", action=skipping))

    _run(sequencer, Context())

    assert recorder.calls[-1] == (SKIPPED, "raised by hand")


def test_failure_renders_failed_and_stops_the_run(recorder: RecordingRenderer) -> None:
    error = ValueError("boom")

    async def failing(ctx: Context, controller: StepController) -> None:
        raise error

    sequencer: ActionSequencer[Context] = ActionSequencer(recorder)
    sequencer.add(_step("a"), _step("b", action=failing), _step("c"))
    ctx = Context()

    with pytest.raises(ValueError) as excinfo:
        _run(sequencer, ctx)

    assert excinfo.value is error
    assert ctx.visited == ["a"]
    assert recorder.calls == [
        (RUNNING, "running a"),
        (COMPLETED, "completed a"),
        (RUNNING, "running b"),
        (FAILED, "failed b"),
    ]


def test_failure_without_failed_title_renders_empty_label(recorder: RecordingRenderer) -> None:
    async def failing(ctx: Context, controller: StepController) -> None:
        raise RuntimeError("no label")

    sequencer: ActionSequencer[Context] = ActionSequencer(recorder)
    sequencer.add(Step(titles=lambda ctx: None, action=failing))

    with pytest.raises(RuntimeError):
        _run(sequencer, Context())

    assert recorder.calls == [(RUNNING, ""), (FAILED, "")]


def test_ignored_step_renders_nothing_and_next_step_runs(recorder: RecordingRenderer) -> None:
    sequencer: ActionSequencer[Context] = ActionSequencer(recorder)
    sequencer.add(
        _step("a", ignore_when=lambda ctx: True),
        _step("b", ignore_when=lambda ctx: False),
    )
    ctx = Context()

    _run(sequencer, ctx)

    assert ctx.visited == ["b"]
    assert recorder.calls == [(RUNNING, "running b"), (COMPLETED, "completed b")]


def test_ignore_when_sees_context_written_by_earlier_steps(recorder: RecordingRenderer) -> None:
    async def choose_branch(ctx: Context, controller: StepController) -> None:
        ctx.branch = "feature/PROJ-1"

    sequencer: ActionSequencer[Context] = ActionSequencer(recorder)
    sequencer.add(
        _step("choose", action=choose_branch),
        _step("needs-branch", ignore_when=lambda ctx: not ctx.branch),
    )
    ctx = Context()

    _run(sequencer, ctx)

    assert ctx.visited == ["needs-branch"]


def test_titles_are_resolved_when_the_step_starts(recorder: RecordingRenderer) -> None:
    async def choose_branch(ctx: Context, controller: StepController) -> None:
        ctx.branch = "feature/PROJ-1"

    sequencer: ActionSequencer[Context] = ActionSequencer(recorder)
    sequencer.add(
        _step("choose", action=choose_branch),
        Step(
            titles=lambda ctx: {RUNNING: f"Switching to {ctx.branch}", COMPLETED: f"On {ctx.branch}"},
            action=lambda ctx, controller: None,
        ),
    )

    _run(sequencer, Context())

    assert recorder.calls[2:] == [
        (RUNNING, "Switching to feature/PROJ-1"),
        (COMPLETED, "On feature/PROJ-1"),
    ]


def test_titles_may_be_keyed_by_state_value(recorder: RecordingRenderer) -> None:
    sequencer: ActionSequencer[Context] = ActionSequencer(recorder)
    sequencer.add(Step(titles=lambda ctx: {"running": "go", "completed": "done"}, action=lambda ctx, c: None))

    _run(sequencer, Context())

    assert recorder.calls == [(RUNNING, "go"), (COMPLETED, "done")]


def test_synchronous_actions_are_supported(recorder: RecordingRenderer) -> None:
    def action(ctx: Context, controller: StepController) -> None:
        ctx.visited.append("sync")

    sequencer: ActionSequencer[Context] = ActionSequencer(recorder)
    sequencer.add(_step("sync", action=action))
    ctx = Context()

    _run(sequencer, ctx)

    assert ctx.visited == ["sync"]
    assert recorder.states == [RUNNING, COMPLETED]


def test_rollback_is_never_invoked(recorder: RecordingRenderer) -> None:
    rolled_back: list[str] = []

    async def rollback(ctx: Context, controller: StepController) -> None:
        rolled_back.append("a")

    async def failing(ctx: Context, controller: StepController) -> None:
        raise RuntimeError("later failure")

    sequencer: ActionSequencer[Context] = ActionSequencer(recorder)
    sequencer.add(_step("a", rollback=rollback), _step("b", action=failing))

    with pytest.raises(RuntimeError):
        _run(sequencer, Context())

    assert rolled_back == []


def test_repeated_runs_render_identical_sequences(recorder: RecordingRenderer) -> None:
    async def skip_when_branch_set(ctx: Context, controller: StepController) -> None:
        if ctx.branch:
            controller.skip(f"already on {ctx.branch}")

    sequencer: ActionSequencer[Context] = ActionSequencer(recorder)
    sequencer.add(_step("a"), _step("b", action=skip_when_branch_set), _step("c", ignore_when=lambda ctx: True))

    _run(sequencer, Context(branch="main"))
    first = list(recorder.calls)
    recorder.clear()
    _run(sequencer, Context(branch="main"))

    assert recorder.calls == first
    assert first == [
        (RUNNING, "running a"),
        (COMPLETED, "completed a"),
        (RUNNING, "running b"),
        (SKIPPED, "already on main"),
    ]


def test_actions_may_run_concurrent_sub_work(recorder: RecordingRenderer) -> None:
    async def fetch(name: str) -> str:
        await asyncio.sleep(0)
        return name

    async def gather(ctx: Context, controller: StepController) -> None:
        ctx.visited.extend(await asyncio.gather(fetch("issue"), fetch("branches")))

    sequencer: ActionSequencer[Context] = ActionSequencer(recorder)
    sequencer.add(_step("gather", action=gather), _step("after"))
    ctx = Context()

    _run(sequencer, ctx)

    assert ctx.visited == ["issue", "branches", "after"]


@pytest.mark.parametrize("interruption", [asyncio.CancelledError(), KeyboardInterrupt()])
def test_interruption_renders_failed_and_propagates_unchanged(
    recorder: RecordingRenderer, interruption: BaseException
) -> None:
    async def interrupted(ctx: Context, controller: StepController) -> None:
        await asyncio.sleep(0)
        raise interruption

    sequencer: ActionSequencer[Context] = ActionSequencer(recorder)
    sequencer.add(_step("a", action=interrupted), _step("b"))
    ctx = Context()

    async def main() -> BaseException:
        with pytest.raises(type(interruption)) as excinfo:
            await sequencer.run(ctx)
        return excinfo.value

    raised = asyncio.run(main())

    assert raised is interruption
    assert ctx.visited == []
    assert recorder.calls == [(RUNNING, "running a"), (FAILED, "failed a")]
