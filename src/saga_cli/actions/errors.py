"""Exception hierarchy for the action sequencer."""

from __future__ import annotations


class ActionSequencerError(RuntimeError):
    """Base exception for sequencer control flow."""


class SkipActionError(ActionSequencerError):
    """Raised by a step's action to mark itself skipped.

    The sequencer recognises this type and renders the step as skipped
    instead of failed. The run carries on with the next step.
    """

    def __init__(self, reason: str | None = None):
        self.reason = reason
        super().__init__(reason or "")
