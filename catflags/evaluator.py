"""Evaluation of a setting's targeting and percentage rules for a user."""

from __future__ import annotations

import hashlib
from typing import Any, List, Optional

import semver

from .user import User

__all__ = ["RolloutEvaluator"]

_COMPARATOR_TEXTS = (
    "IS ONE OF",
    "IS NOT ONE OF",
    "CONTAINS",
    "DOES NOT CONTAIN",
    "IS ONE OF (SemVer)",
    "IS NOT ONE OF (SemVer)",
    "< (SemVer)",
    "<= (SemVer)",
    "> (SemVer)",
    ">= (SemVer)",
    "= (Number)",
    "<> (Number)",
    "< (Number)",
    "<= (Number)",
    "> (Number)",
    ">= (Number)",
    "IS ONE OF (Sensitive)",
    "IS NOT ONE OF (Sensitive)",
)


class _RuleFormatError(ValueError):
    """A rule or user value could not be parsed for the comparator."""


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _comparator_text(comparator: float) -> str:
    index = int(comparator)
    if 0 <= index < len(_COMPARATOR_TEXTS):
        return _COMPARATOR_TEXTS[index]
    return str(comparator)


def _parse_semver(text: str) -> Any:
    try:
        return semver.VersionInfo.parse(text)
    except (ValueError, TypeError) as err:
        raise _RuleFormatError(str(err)) from err


def _parse_number(text: str) -> float:
    normalized = text.replace(",", ".")
    if not normalized or normalized != normalized.strip() or "_" in normalized:
        raise _RuleFormatError(f"invalid number: {text!r}")
    try:
        return float(normalized)
    except ValueError as err:
        raise _RuleFormatError(f"invalid number: {text!r}") from err


def _sha1_hex(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest()


def _items(comparison_value: str) -> List[str]:
    return [item.strip() for item in comparison_value.split(",")]


def _matches(comparator: float, user_value: str, comparison_value: str) -> bool:
    """Apply ``comparator``; raise _RuleFormatError when a value cannot be parsed."""
    if comparator == 0:
        return any(user_value in item for item in _items(comparison_value))
    if comparator == 1:
        return not any(user_value in item for item in _items(comparison_value))
    if comparator == 2:
        return comparison_value in user_value
    if comparator == 3:
        return comparison_value not in user_value
    if comparator in (4, 5):
        user_version = _parse_semver(user_value)
        versions = [_parse_semver(item) for item in _items(comparison_value) if item]
        matched = any(user_version.compare(version) == 0 for version in versions)
        return matched if comparator == 4 else not matched
    if comparator in (6, 7, 8, 9):
        user_version = _parse_semver(user_value)
        order = user_version.compare(_parse_semver(comparison_value.strip()))
        return {6: order < 0, 7: order <= 0, 8: order > 0, 9: order >= 0}[int(comparator)]
    if comparator in (10, 11, 12, 13, 14, 15):
        user_number = _parse_number(user_value)
        cmp_number = _parse_number(comparison_value)
        return {
            10: user_number == cmp_number,
            11: user_number != cmp_number,
            12: user_number < cmp_number,
            13: user_number <= cmp_number,
            14: user_number > cmp_number,
            15: user_number >= cmp_number,
        }[int(comparator)]
    if comparator in (16, 17):
        digest = _sha1_hex(user_value)
        found = any(digest in item for item in _items(comparison_value))
        return found if comparator == 16 else not found
    return False


class RolloutEvaluator:
    """Resolves a setting node's value for an optional user."""

    def __init__(self, logger: Any) -> None:
        self._logger = logger

    def evaluate(self, node: Any, key: str, user: Optional[User] = None) -> Any:
        """Return the value the setting ``node`` resolves to, or None if it is not an object."""
        if not isinstance(node, dict):
            return None

        self._logger.info("Evaluating GetValue(%s).", key)

        rollout_rules = node.get("r")
        rollout_ok = isinstance(rollout_rules, list)
        percentage_rules = node.get("p")
        percentage_ok = isinstance(percentage_rules, list)

        if user is None:
            if (rollout_ok and rollout_rules) or (percentage_ok and percentage_rules):
                self._logger.warning(
                    "Evaluating GetValue(%s). UserObject missing! You should pass a "
                    "UserObject to get_value() in order to make targeting work properly.",
                    key,
                )
            result = node.get("v")
            self._logger.info("Returning %s.", result)
            return result

        self._logger.info("User object: %r", user)

        if rollout_ok:
            for rule in rollout_rules:
                if not isinstance(rule, dict):
                    continue
                found, value = self._evaluate_rule(rule, user)
                if found:
                    return value

        if percentage_ok and percentage_rules:
            digest = _sha1_hex(key + user.identifier)[:7]
            scaled = int(digest, 16) % 100
            bucket = 0
            for rule in percentage_rules:
                if not isinstance(rule, dict) or not _is_number(rule.get("p")):
                    continue
                bucket += int(rule["p"])
                if scaled < bucket:
                    result = rule.get("v")
                    self._logger.info("Evaluating %% options. Returning %s", result)
                    return result

        result = node.get("v")
        self._logger.info("Returning %s.", result)
        return result

    def _evaluate_rule(self, rule: dict, user: User) -> "tuple[bool, Any]":
        attribute = rule.get("a")
        if not isinstance(attribute, str):
            attribute = ""
        comparison_value = rule.get("c")
        if not isinstance(comparison_value, str):
            comparison_value = ""
        raw_comparator = rule.get("t")
        comparator_ok = _is_number(raw_comparator)
        comparator = raw_comparator if comparator_ok else 0
        user_value = user.get_attribute(attribute)
        value = rule.get("v")

        if not comparator_ok or not user_value:
            self._log_rule(attribute, user_value, comparator, comparison_value, "no match")
            return False, None

        try:
            matched = _matches(comparator, user_value, comparison_value)
        except _RuleFormatError as err:
            self._log_rule(
                attribute, user_value, comparator, comparison_value,
                f"SKIP rule. Validation error: {err}",
            )
            return False, None

        if matched:
            self._log_rule(
                attribute, user_value, comparator, comparison_value,
                f"match, returning: {value}",
            )
            return True, value

        self._log_rule(attribute, user_value, comparator, comparison_value, "no match")
        return False, None

    def _log_rule(
        self, attribute: str, user_value: str, comparator: float,
        comparison_value: str, outcome: str,
    ) -> None:
        self._logger.info(
            "Evaluating rule: [%s:%s] [%s] [%s] => %s",
            attribute, user_value, _comparator_text(comparator), comparison_value, outcome,
        )