"""
State machine enforcement for Seizure.

IN_PROGRESS is the initial state and the only editable one. Validate exit
(EXIT_AUTHORIZED) and cancel (EXIT_PERFORMED) are privileged decisions that
apply from any state. VALIDATED_FOR_DEPOSIT, IN_DEPOSIT and AUCTION_SALE
are reserved in the schema; no operation may target them.
"""

from core.exceptions import InvalidStateError

IN_PROGRESS = "IN_PROGRESS"
VALIDATED_FOR_DEPOSIT = "VALIDATED_FOR_DEPOSIT"
IN_DEPOSIT = "IN_DEPOSIT"
EXIT_AUTHORIZED = "EXIT_AUTHORIZED"
EXIT_PERFORMED = "EXIT_PERFORMED"
AUCTION_SALE = "AUCTION_SALE"

ALL_STATUSES = (
    IN_PROGRESS,
    VALIDATED_FOR_DEPOSIT,
    IN_DEPOSIT,
    EXIT_AUTHORIZED,
    EXIT_PERFORMED,
    AUCTION_SALE,
)

RESERVED_STATUSES = (VALIDATED_FOR_DEPOSIT, IN_DEPOSIT, AUCTION_SALE)

# Targets reachable from every state through a privileged decision.
EXIT_DECISIONS = (EXIT_AUTHORIZED, EXIT_PERFORMED)

SEIZURE_TRANSITIONS = {status: list(EXIT_DECISIONS) for status in ALL_STATUSES}


def validate_transition(current_status, target_status):
    """
    Validate a Seizure state transition.

    Args:
        current_status: Current state
        target_status: Target state

    Returns:
        bool: True if transition is allowed

    Raises:
        InvalidStateError: If transition is disallowed
    """
    if current_status not in SEIZURE_TRANSITIONS:
        raise InvalidStateError(
            f"Invalid current status: {current_status}",
            {"current_status": current_status},
        )

    if target_status in RESERVED_STATUSES:
        raise InvalidStateError(
            f"Status {target_status} is reserved and cannot be reached",
            {"current_status": current_status, "target_status": target_status},
        )

    allowed_targets = SEIZURE_TRANSITIONS[current_status]

    if target_status not in allowed_targets:
        raise InvalidStateError(
            (
                "Invalid transition: "
                f"Seizure cannot transition from {current_status} to "
                f"{target_status}"
            ),
            {
                "current_status": current_status,
                "target_status": target_status,
                "allowed_transitions": allowed_targets,
            },
        )

    return True


def is_editable(status):
    """Only IN_PROGRESS seizures can be edited, whatever the caller's role."""
    return status == IN_PROGRESS
