"""TransitionManager - validates, classifies and builds status transitions.

Validation order:
1. both statuses must exist (INVALID_STATUS, short-circuits)
2. the target must be an allowed transition of the source
   (INVALID_TRANSITION, short-circuits)
3. every requirement of the target status is evaluated against the data;
   failures are accumulated so one call reports all of them

The manager performs no I/O and keeps no state besides the workflow it was
built with, so a single instance can serve concurrent callers.
"""

import copy
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

from .errors import StateTransitionError
from .hooks import NO_HOOKS, TransitionHooks
from .models import (
    HistoryEntry,
    Requirement,
    StatusError,
    StatusErrorType,
    StatusMetadata,
    Transition,
    TransitionResult,
    TransitionType,
    ValidationResult,
    status_id,
)
from .queries import StatusQueryFacade
from .workflow import WorkflowDefinition


logger = logging.getLogger(__name__)

DEFAULT_USER_ID = "system"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TransitionManager:
    """Transition validation and classification for one workflow.

    Args:
        workflow: Immutable workflow definition
        hooks: Lifecycle callbacks invoked by transition()
        clock: Timestamp source for transitions and history entries
    """

    def __init__(
        self,
        workflow: WorkflowDefinition,
        hooks: Optional[TransitionHooks] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.workflow = workflow
        self.hooks = hooks or NO_HOOKS
        self.clock = clock
        self._queries = StatusQueryFacade(workflow)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_transition(self, from_status: Any, to_status: Any, data: Any = None) -> ValidationResult:
        """Check whether moving from ``from_status`` to ``to_status`` is allowed.

        Args:
            from_status: Current status of the document
            to_status: Proposed target status
            data: Transition data handed to the target's requirement predicates

        Returns:
            ValidationResult. An invalid move is reported in the result,
            never raised.
        """
        if data is None:
            data = {}

        for candidate in (from_status, to_status):
            if not self.is_valid_status(candidate):
                logger.debug(f"Rejected transition {from_status} -> {to_status}: unknown status {candidate}")
                return ValidationResult(
                    valid=False,
                    errors=[StatusError(
                        type=StatusErrorType.INVALID_STATUS,
                        message=f"Invalid status: {status_id(candidate)}",
                        details={"status": status_id(candidate)},
                    )],
                )

        from_status = status_id(from_status)
        to_status = status_id(to_status)
        allowed = list(self.workflow.statuses[from_status].allowed_transitions)

        if to_status not in allowed:
            logger.debug(f"Rejected transition {from_status} -> {to_status}: not in {allowed}")
            return ValidationResult(
                valid=False,
                errors=[StatusError(
                    type=StatusErrorType.INVALID_TRANSITION,
                    message=f"Invalid transition: {from_status} -> {to_status}",
                    details={"from": from_status, "to": to_status},
                )],
                metadata={"allowedTransitions": allowed},
            )

        requirements = self.workflow.statuses[to_status].requirements
        errors, warnings = self._evaluate_requirements(to_status, requirements, data)

        result = ValidationResult(
            valid=not errors,
            errors=errors,
            warnings=warnings,
            metadata={
                "allowedTransitions": allowed,
                "requirements": list(requirements),
            },
        )

        logger.debug(
            f"Validated transition {from_status} -> {to_status}: valid={result.valid}, "
            f"errors={len(errors)}, warnings={len(warnings)}"
        )
        return result

    def validate_requirements(self, status: Any, data: Any = None) -> ValidationResult:
        """Evaluate the requirements of a single status, outside of a transition."""
        if data is None:
            data = {}

        if not self.is_valid_status(status):
            return ValidationResult(
                valid=False,
                errors=[StatusError(
                    type=StatusErrorType.INVALID_STATUS,
                    message=f"Invalid status: {status_id(status)}",
                    details={"status": status_id(status)},
                )],
            )

        status = status_id(status)
        requirements = self.workflow.statuses[status].requirements
        errors, warnings = self._evaluate_requirements(status, requirements, data)
        return ValidationResult(
            valid=not errors,
            errors=errors,
            warnings=warnings,
            metadata={"requirements": list(requirements)},
        )

    def _evaluate_requirements(
        self,
        status: str,
        requirements: Mapping[str, Requirement],
        data: Any,
    ) -> tuple[list[StatusError], list[StatusError]]:
        errors: list[StatusError] = []
        warnings: list[StatusError] = []

        for name, requirement in requirements.items():
            if not requirement.level.evaluated:
                continue

            bucket = errors if requirement.level.blocking else warnings
            try:
                satisfied = requirement.validate(data)
            except Exception as e:
                logger.warning(
                    f"Requirement '{name}' of status {status} raised during validation: {e}",
                    exc_info=True
                )
                bucket.append(StatusError(
                    type=StatusErrorType.VALIDATION_FAILED,
                    message=f"Validation error for {name}: {e}",
                    details={"requirement": name, "status": status, "error": type(e).__name__},
                ))
                continue

            if not satisfied:
                bucket.append(StatusError(
                    type=StatusErrorType.REQUIREMENTS_NOT_MET,
                    message=requirement.failure_message,
                    details={"requirement": name, "status": status, "level": requirement.level.value},
                ))

        return errors, warnings

    # ------------------------------------------------------------------
    # Transition
    # ------------------------------------------------------------------

    def transition(
        self,
        from_status: Any,
        to_status: Any,
        reason: str = "",
        data: Any = None,
        user_id: str = DEFAULT_USER_ID,
        skip_validation: bool = False,
    ) -> TransitionResult:
        """Validate and build a status transition.

        Nothing is persisted: the returned transition and history entry are
        for the caller to store. Each record holds its own deep copy of
        ``data``; requirement predicates see the caller's object.

        Raises:
            StateTransitionError: If validation fails. Callers needing the
                structured errors should call validate_transition() first.
        """
        if data is None:
            data = {}

        timestamp = self.clock()
        transition = Transition(
            from_status=status_id(from_status),
            to_status=status_id(to_status),
            reason=reason,
            data=copy.deepcopy(data),
            user_id=user_id,
            timestamp=timestamp,
        )

        self.hooks.before(transition)

        if not skip_validation:
            validation = self.validate_transition(from_status, to_status, data)
            if not validation.valid:
                error = StateTransitionError(
                    f"Invalid transition: {', '.join(validation.error_messages)}",
                    from_status=transition.from_status,
                    to_status=transition.to_status,
                    errors=validation.errors,
                )
                self.hooks.error(error, transition)
                raise error

        history_entry = HistoryEntry(
            to_status=transition.to_status,
            reason=reason,
            data=copy.deepcopy(data),
            user_id=user_id,
            timestamp=timestamp,
        )
        result = TransitionResult(
            success=True,
            transition=transition,
            history_entry=history_entry,
            type=self.get_transition_type(from_status, to_status),
            timestamp=timestamp,
        )

        self.hooks.after(transition)

        logger.info(
            f"Transition {transition.from_status} -> {transition.to_status} ({result.type.value}) "
            f"by {user_id}",
            extra={
                "from_status": transition.from_status,
                "to_status": transition.to_status,
                "user_id": user_id,
            }
        )
        return result

    def get_transition_type(self, from_status: Any, to_status: Any) -> TransitionType:
        """Classify a transition by declaration order.

        Moving to the initial or the cancellation status is always RESET.
        Otherwise the declaration indexes are compared; no path search is
        done, so two statuses without a direct edge are still classified.
        Unknown statuses index as -1.
        """
        if self.workflow.is_reset_target(to_status):
            return TransitionType.RESET

        if self.workflow.ordinal(to_status) > self.workflow.ordinal(from_status):
            return TransitionType.FORWARD
        return TransitionType.BACKWARD

    # ------------------------------------------------------------------
    # Lookups shared with StatusQueryFacade
    # ------------------------------------------------------------------

    def get_available_transitions(self, status: Any) -> list[str]:
        return self._queries.get_available_transitions(status)

    def is_valid_status(self, status: Any) -> bool:
        return self._queries.is_valid_status(status)

    def get_status_metadata(self, status: Any) -> StatusMetadata:
        return self._queries.get_status_metadata(status)
