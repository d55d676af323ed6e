class AuthenticationError(Exception):
    """Missing, invalid or expired credentials. Rendered as HTTP 401."""

    def __init__(self, message="Authentication required"):
        super().__init__(message)
        self.message = message
