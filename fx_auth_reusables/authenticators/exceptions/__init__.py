from .authentication_exception import AuthenticationException

__all__ = [
    "AuthenticationException"
]
