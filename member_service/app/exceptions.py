from __future__ import annotations


class MemberServiceError(Exception):
    """Base exception for all member-service errors."""


class ParseError(MemberServiceError):
    """Command text that cannot be turned into a command (unknown keyword, bad arguments)."""


class CommandError(MemberServiceError):
    """A well-formed command that cannot run against the current member list.

    These are expected user-facing failures. The registry is never touched when
    one is raised.
    """

    code = "command_failed"
    default_message = "The command could not be executed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidIndexError(CommandError):
    code = "invalid_member_index"
    default_message = "The member index provided is invalid"


class InvalidMemberIdError(CommandError):
    code = "invalid_member_id"
    default_message = "The member ID provided is invalid"


class InvalidTransactionIdError(CommandError):
    code = "invalid_transaction_id"
    default_message = "The transaction ID provided is invalid"


class InvalidReservationIdError(CommandError):
    code = "invalid_reservation_id"
    default_message = "The reservation ID provided is invalid"


class DuplicateMemberCommandError(CommandError):
    code = "duplicate_member"
    default_message = "This member already exists"


class InsufficientPointsError(CommandError):
    code = "insufficient_points"
    default_message = "The member does not have enough points"


class IdSpaceExhaustedError(CommandError):
    code = "id_space_exhausted"
    default_message = "No more IDs are available"


class DuplicateMemberError(MemberServiceError):
    """Insert/replace that would leave two registry entries with the same member ID."""

    def __init__(self, message: str = "Operation would result in duplicate members") -> None:
        super().__init__(message)


class MemberNotFoundError(MemberServiceError):
    """Replace/remove/lookup of a member that is not in the registry."""

    def __init__(self, message: str = "Member not found") -> None:
        super().__init__(message)


class DataFormatError(MemberServiceError):
    """The save file cannot be turned back into valid members."""
