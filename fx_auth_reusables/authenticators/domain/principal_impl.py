from dataclasses import dataclass


@dataclass(frozen=True)
class PrincipalImpl:
    """
    Immutable principal identified only by its name.
    Two instances with the same name are equal.
    """
    name: str

    def get_name(self) -> str:
        """Returns the principal name."""
        return self.name

    def __str__(self) -> str:
        return self.name
