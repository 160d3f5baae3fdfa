from typing import Optional


class AuthenticationException(Exception):
    """Raised when the authentication mechanism itself could not complete.

    e.g. the upstream identity provider is unreachable.  Invalid credentials are
    not an exception, an authenticator returns None for those.
    """
    cause: Optional[BaseException]

    def __init__(
        self,
        error_message: str,
        cause: Optional[BaseException] = None
    ) -> None:
        super().__init__(error_message)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    @classmethod
    def from_message(cls, error_message: str) -> "AuthenticationException":
        instance: AuthenticationException = cls(error_message, None)
        return instance

    @classmethod
    def from_message_and_cause(cls, error_message: str, cause: BaseException) -> "AuthenticationException":
        instance: AuthenticationException = cls(error_message, cause)
        return instance

    def get_cause(self) -> Optional[BaseException]:
        value: Optional[BaseException] = self.cause
        return value

    def __repr__(self) -> str:
        repr_str: str = (
            f"{self.__class__.__name__}(message={self.args[0]!r}, "
            f"cause={self.cause!r})"
        )
        return repr_str
