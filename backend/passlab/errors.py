"""Error taxonomy shared by the store, the hashing helpers and the API."""


class PassLabError(Exception):
    status_code = 500
    public_message = "Server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)


class ValidationError(PassLabError):
    status_code = 400
    public_message = "Username and password required!"

    def __init__(self, message: str | None = None):
        super().__init__(message)
        # Returned to the client as-is.
        self.public_message = str(self)


class DuplicateUsernameError(PassLabError):
    status_code = 409
    public_message = "Username already exists!"


class InvalidCredentialsError(PassLabError):
    status_code = 401
    public_message = "Invalid credentials!"


class InternalHashingError(PassLabError):
    """Malformed digest or a failure inside bcrypt."""


class StoreError(PassLabError):
    """Unexpected database failure."""
