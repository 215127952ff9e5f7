"""Identity store exceptions.

Raised by ``IdentityRepository`` implementations so the application layer
can tell a uniqueness conflict apart from any other storage failure
without looking at driver-specific errors.
"""


class IdentityConflictError(Exception):
    """Email already registered (uniqueness constraint violated)."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email already registered: {email}")


class IdentityStoreError(Exception):
    """The identity store failed for a reason other than a conflict."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Identity store failure during {operation}")
