"""Custom exceptions for GroupLedger."""


class GroupLedgerError(Exception):
    """Base exception for all GroupLedger errors."""

    pass


class ConfigurationError(GroupLedgerError):
    """Raised when configuration is invalid or missing."""

    pass


class InputInconsistencyError(GroupLedgerError):
    """Raised when split amounts don't add up to the expense total."""

    pass


class DegenerateInputError(GroupLedgerError):
    """Raised when a split is requested for zero participants."""

    pass


class UnknownParticipantError(GroupLedgerError):
    """Raised when a payer or split references an id missing from the roster."""

    def __init__(self, participant_id: str, message: str | None = None):
        self.participant_id = participant_id
        super().__init__(
            message or f"Participant {participant_id} is not a member of the group"
        )
