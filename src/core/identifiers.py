"""Identifier format validation, independent of the storage backend."""
from typing import Protocol
from uuid import UUID


class IdentifierValidator(Protocol):
    """Checks whether a raw string is a well-formed entity identifier."""

    def parse(self, raw: str) -> UUID | None:
        """Return the parsed identifier, or None if the format is invalid."""
        ...


class UUIDIdentifierValidator:
    """Accepts canonical hyphenated UUID strings (any version)."""

    def parse(self, raw: str) -> UUID | None:
        """Parse a canonical 36-character UUID string."""
        # uuid.UUID also accepts braces, urn: prefixes and bare hex; only the
        # canonical form is a valid movie identifier.
        if len(raw) != 36:
            return None
        try:
            parsed = UUID(raw)
        except ValueError:
            return None
        if str(parsed) != raw.lower():
            return None
        return parsed


_default_validator = UUIDIdentifierValidator()


def get_identifier_validator() -> IdentifierValidator:
    """Dependency returning the identifier validator in use."""
    return _default_validator
