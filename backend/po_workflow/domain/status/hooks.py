"""Transition lifecycle hooks.

Hooks are synchronous callables invoked by TransitionManager.transition().
They must not block; exceptions raised by a hook propagate to the caller.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .models import Transition


logger = logging.getLogger(__name__)

TransitionCallback = Callable[[Transition], None]
ErrorCallback = Callable[[Exception, Transition], None]


@dataclass(frozen=True)
class TransitionHooks:
    """Callbacks around a transition.

    before_transition: called before validation
    after_transition: called once the result has been built
    on_error: called when validation rejects the transition, before raising
    """
    before_transition: Optional[TransitionCallback] = None
    after_transition: Optional[TransitionCallback] = None
    on_error: Optional[ErrorCallback] = None

    def before(self, transition: Transition) -> None:
        if self.before_transition is not None:
            self.before_transition(transition)

    def after(self, transition: Transition) -> None:
        if self.after_transition is not None:
            self.after_transition(transition)

    def error(self, error: Exception, transition: Transition) -> None:
        if self.on_error is not None:
            self.on_error(error, transition)


def _log_start(transition: Transition) -> None:
    logger.info(
        f"Starting transition from {transition.from_status} to {transition.to_status}",
        extra={
            "from_status": transition.from_status,
            "to_status": transition.to_status,
            "user_id": transition.user_id,
        }
    )


def _log_complete(transition: Transition) -> None:
    logger.info(
        f"Completed transition from {transition.from_status} to {transition.to_status}",
        extra={
            "from_status": transition.from_status,
            "to_status": transition.to_status,
            "user_id": transition.user_id,
        }
    )


def _log_error(error: Exception, transition: Transition) -> None:
    logger.error(
        f"Error in transition from {transition.from_status} to {transition.to_status}: {error}",
        extra={
            "from_status": transition.from_status,
            "to_status": transition.to_status,
            "user_id": transition.user_id,
        }
    )


def logging_hooks() -> TransitionHooks:
    """Default hooks writing one log line per lifecycle event."""
    return TransitionHooks(
        before_transition=_log_start,
        after_transition=_log_complete,
        on_error=_log_error,
    )


NO_HOOKS = TransitionHooks()
