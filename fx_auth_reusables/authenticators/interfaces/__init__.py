from .authenticator_interface import IAuthenticator

__all__ = [
    "IAuthenticator"
]
