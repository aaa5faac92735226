"""Parsing of the configuration JSON and lookup of setting values."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from .evaluator import RolloutEvaluator
from .user import User

__all__ = ["ParseError", "ConfigParser"]


class ParseError(Exception):
    """The configuration could not be parsed or the setting could not be resolved."""


class ConfigParser:
    """Reads setting values out of a configuration JSON document."""

    def __init__(self, logger: Any) -> None:
        self._logger = logger
        self._evaluator = RolloutEvaluator(logger)

    def parse(self, json_body: str, key: str, user: Optional[User] = None) -> Any:
        """Return the value of setting ``key``, evaluated for ``user`` if given.

        Raises ValueError for an empty key and ParseError when the document
        is malformed, the key is missing or the setting evaluates to null.
        """
        if not key:
            raise ValueError("Key cannot be empty")

        try:
            root = self._deserialize(json_body)
        except ParseError as err:
            raise ParseError(f"JSON parsing failed. {err}.") from err

        node = root.get(key)
        if node is None:
            raise ParseError(
                f"Value not found for key {key}. "
                f"Here are the available keys: {', '.join(root)}"
            )

        parsed = self._evaluator.evaluate(node, key, user)
        if parsed is None:
            raise ParseError(f"Null evaluated for key {key}.")
        return parsed

    def get_all_keys(self, json_body: str) -> List[str]:
        """Return every setting key in the document; raise ParseError if it is malformed."""
        return list(self._deserialize(json_body))

    @staticmethod
    def _deserialize(json_body: str) -> Dict[str, Any]:
        try:
            root = json.loads(json_body)
        except (json.JSONDecodeError, TypeError) as err:
            raise ParseError(str(err)) from err
        if not isinstance(root, dict):
            raise ParseError(f"JSON mapping failed, json: {json_body}")
        return root