from .bounded_principal_cache import BoundedPrincipalCache

__all__ = [
    "BoundedPrincipalCache"
]
