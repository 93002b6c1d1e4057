"""Parsing of ``owner/name:version`` references."""

from __future__ import annotations

from typing import Optional, Tuple

from .errors import InvalidVersionError


def parse_version(reference: str) -> Optional[Tuple[str, str]]:
    """Split ``owner/name:version`` into ``("owner/name", "version")``.

    Only the first colon separates the parts, so the version keeps any
    further colons. Returns None when there is no colon or the model part
    has no slash.
    """
    if ":" not in reference:
        return None
    model, version = reference.split(":", 1)
    if "/" not in model:
        return None
    return model, version


def split_model(model: str) -> Tuple[str, str]:
    """Split ``owner/name`` into its two parts.

    Raises InvalidVersionError if either part is empty.
    """
    owner, _, name = model.partition("/")
    if not owner or not name:
        raise InvalidVersionError(model)
    return owner, name


__all__ = ["parse_version", "split_model"]
