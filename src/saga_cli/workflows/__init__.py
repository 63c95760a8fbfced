"""Multi-step workflows built on the action sequencer."""

from saga_cli.workflows.ready import ReadyContext, build_ready_sequencer
from saga_cli.workflows.start import StartWorkContext, build_start_sequencer
from saga_cli.workflows.transition import transition_step

__all__ = [
    "ReadyContext",
    "StartWorkContext",
    "build_ready_sequencer",
    "build_start_sequencer",
    "transition_step",
]
