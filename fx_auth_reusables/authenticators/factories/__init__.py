from .caching_authenticator_composition_root import (
    CachingAuthenticatorCompositionRoot,
    get_caching_authenticator,
    get_container,
)

__all__ = [
    "CachingAuthenticatorCompositionRoot",
    "get_caching_authenticator",
    "get_container"
]
