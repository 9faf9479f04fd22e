"""Infer what a query is looking for from its lexical shape."""

from __future__ import annotations

import re

from console_search.domain.models import IntentLabel

ADDRESS_PATTERN = re.compile(r"0x[a-fA-F0-9]{40}")
TX_HASH_PATTERN = re.compile(r"0x[a-fA-F0-9]{64}")
BLOCK_PATTERN = re.compile(r"[0-9]+")
CONTENT_PATTERN = re.compile(r"[A-Za-z0-9_\- ]+")

# "0x" plus a full 40 digit address.
PARTIAL_ADDRESS_MAX_LENGTH = 42


def classify(query: str) -> IntentLabel:
    """Map raw query text to an intent; the first matching rule wins.

    Hex-prefixed queries are checked before the numeric and content rules since
    addresses and hashes are alphanumeric themselves. ``UNSET`` is returned both for
    blank queries and for text no rule accepts; use :func:`is_rejected` to tell
    them apart.
    """

    if not query.strip():
        return IntentLabel.UNSET

    if query.startswith("0x"):
        if ADDRESS_PATTERN.fullmatch(query):
            return IntentLabel.ACCOUNT
        if TX_HASH_PATTERN.fullmatch(query):
            return IntentLabel.TRANSACTION
        if len(query) <= PARTIAL_ADDRESS_MAX_LENGTH:
            return IntentLabel.ACCOUNT
        return IntentLabel.TRANSACTION

    if BLOCK_PATTERN.fullmatch(query):
        return IntentLabel.BLOCK
    if CONTENT_PATTERN.fullmatch(query):
        return IntentLabel.CONTENT
    return IntentLabel.UNSET


def is_rejected(query: str) -> bool:
    """True for non-blank text that matches no intent at all."""

    return bool(query.strip()) and classify(query) is IntentLabel.UNSET


__all__ = ["classify", "is_rejected"]
