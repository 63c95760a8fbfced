"""Sequential workflow engine shared by every multi-step command."""

from saga_cli.actions.errors import ActionSequencerError, SkipActionError
from saga_cli.actions.renderers import LogRenderer, RecordingRenderer
from saga_cli.actions.sequencer import ActionSequencer
from saga_cli.actions.types import Renderer, Step, StepController, StepState

__all__ = [
    "ActionSequencer",
    "ActionSequencerError",
    "LogRenderer",
    "RecordingRenderer",
    "Renderer",
    "SkipActionError",
    "Step",
    "StepController",
    "StepState",
]
