"""Exception raised by the User entity on an illegal status change."""

from keystone.domain.enums import AccountStatus


class InvalidStatusTransition(ValueError):
    """Raised when the transition table forbids a status change.

    Handlers catch it and return ``Failure(INVALID_STATUS_TRANSITION)``.

    Attributes:
        current: Status the account is in.
        target: Status that was requested.
    """

    def __init__(self, current: AccountStatus, target: AccountStatus) -> None:
        self.current = current
        self.target = target
        super().__init__(
            f"Cannot transition account from {current.value} to {target.value}"
        )
