from abc import ABC, abstractmethod
from typing import Generic, Hashable, Optional, TypeVar

C = TypeVar("C", bound=Hashable)
P = TypeVar("P")


class IAuthenticator(ABC, Generic[C, P]):
    """Interface for turning a set of credentials into a principal.

    Any verification mechanism (database lookup, identity provider call,
    signature check) can sit behind this interface.
    """

    @abstractmethod
    def authenticate(self, credentials: C) -> Optional[P]:
        """
        Authenticates the given credentials.

        Args:
            credentials: The credentials presented by the caller

        Returns:
            The resolved principal, or None if the credentials are not valid

        Raises:
            AuthenticationException if the authentication mechanism itself could not complete
        """
        pass
