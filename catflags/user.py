"""The user object used for targeted evaluation."""

from __future__ import annotations

from typing import Dict, Mapping, Optional

__all__ = ["User"]


class User:
    """Attributes identifying a user for rollout evaluation."""

    def __init__(
        self,
        identifier: str,
        email: str = "",
        country: str = "",
        custom: Optional[Mapping[str, str]] = None,
    ) -> None:
        if not identifier:
            raise ValueError("identifier cannot be empty")
        self._identifier = identifier
        self._attributes: Dict[str, str] = {"identifier": identifier}
        if email:
            self._attributes["email"] = email
        if country:
            self._attributes["country"] = country
        for name, value in (custom or {}).items():
            self._attributes[name.lower()] = value

    @property
    def identifier(self) -> str:
        """The user's identifier."""
        return self._identifier

    @property
    def attributes(self) -> Dict[str, str]:
        """A copy of all attributes, keyed by lower-case name."""
        return dict(self._attributes)

    def get_attribute(self, key: str) -> str:
        """Return the attribute named ``key`` (case-insensitively), or ""."""
        return self._attributes.get(key.lower(), "") or ""

    def __repr__(self) -> str:
        return f"User(identifier={self._identifier!r}, attributes={self._attributes!r})"