"""Encoding and decoding of ``namespace:kind:discriminator`` custom ids."""

from __future__ import annotations

from dataclasses import dataclass


DELIMITER = ":"


class InvalidIdentifierError(ValueError):
    """Raised when a custom id cannot be encoded or decoded."""


@dataclass(frozen=True)
class CustomIdentifier:
    """Parsed custom id attached to an interactive element."""

    namespace: str
    kind: str
    discriminator: str

    def encode(self) -> str:
        return encode(self.namespace, self.kind, self.discriminator)


def _check_token(name: str, value: str) -> None:
    if not isinstance(value, str) or not value:
        raise InvalidIdentifierError(f"Custom id {name} must be a non-empty string.")
    if DELIMITER in value:
        raise InvalidIdentifierError(f"Custom id {name} must not contain '{DELIMITER}': {value!r}")


def encode(namespace: str, kind: str, discriminator: str) -> str:
    """Serialise the triple; only the discriminator may contain the delimiter."""

    _check_token("namespace", namespace)
    _check_token("kind", kind)
    return DELIMITER.join((namespace, kind, str(discriminator)))


def decode(raw: str) -> CustomIdentifier:
    """Parse a custom id, keeping everything after the second delimiter intact."""

    if not isinstance(raw, str):
        raise InvalidIdentifierError("Custom id must be a string.")

    parts = raw.split(DELIMITER, 2)
    if len(parts) < 3:
        raise InvalidIdentifierError(f"Malformed custom id: {raw!r}")

    namespace, kind, discriminator = parts
    if not namespace or not kind:
        raise InvalidIdentifierError(f"Malformed custom id: {raw!r}")
    return CustomIdentifier(namespace=namespace, kind=kind, discriminator=discriminator)
