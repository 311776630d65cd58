"""
Domain errors raised by services and mapped to HTTP responses by routers.
"""


class DuplicateNameError(ValueError):
    """A create or rename would give two records of one kind the same name."""

    def __init__(self, kind: str, name: str, field: str = "name"):
        self.kind = kind
        self.name = name
        self.field = field
        super().__init__(f"A {kind.lower()} with this name already exists.")


class InvalidCredentialsError(ValueError):
    """The supplied password does not match the account."""
