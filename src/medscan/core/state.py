# ============================================================================
# src/medscan/core/state.py
# ============================================================================
"""
Scan State Machine

    Idle -> AwaitingText -> Extracting -> Succeeded
                                       -> InsufficientConfidence -> AwaitingText (next source)

One machine per scan call; the orchestrator keeps nothing between calls.
Illegal transitions raise InvalidStateTransitionError, which means a bug in
the caller of the machine rather than a user-facing failure.
"""

import logging
from typing import Dict, FrozenSet, List

from .context.enums import ExtractionState
from ..utils.exceptions import InvalidStateTransitionError

logger = logging.getLogger(__name__)

TRANSITIONS: Dict[ExtractionState, FrozenSet[ExtractionState]] = {
    ExtractionState.IDLE: frozenset({ExtractionState.AWAITING_TEXT}),
    ExtractionState.AWAITING_TEXT: frozenset({
        ExtractionState.EXTRACTING,
        # recognition produced nothing usable
        ExtractionState.INSUFFICIENT_CONFIDENCE,
    }),
    ExtractionState.EXTRACTING: frozenset({
        ExtractionState.SUCCEEDED,
        ExtractionState.INSUFFICIENT_CONFIDENCE,
    }),
    ExtractionState.INSUFFICIENT_CONFIDENCE: frozenset({ExtractionState.AWAITING_TEXT}),
    ExtractionState.SUCCEEDED: frozenset(),
}


class ScanStateMachine:
    """Tracks and validates the state of one scan."""

    def __init__(self):
        self.state = ExtractionState.IDLE
        self.history: List[ExtractionState] = [self.state]

    def transition(self, target: ExtractionState) -> ExtractionState:
        if target not in TRANSITIONS[self.state]:
            raise InvalidStateTransitionError(self.state.value, target.value)

        logger.debug(f"Scan state {self.state.value} -> {target.value}")
        self.state = target
        self.history.append(target)
        return target

    @property
    def is_terminal(self) -> bool:
        return not TRANSITIONS[self.state]

    def can_retry(self) -> bool:
        """True when another capture source may still be tried."""
        return self.state is ExtractionState.INSUFFICIENT_CONFIDENCE
