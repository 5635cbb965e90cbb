"""Pydantic models that decode untyped directory responses.

Vault answers every call with a loosely typed JSON ``data`` payload. These
models validate the two shapes the tool relies on (key listings and lease
listings) so that a payload of the wrong shape surfaces as
:class:`~vault_lease_revoke.errors.MalformedResponseError` instead of an
``AttributeError`` or ``TypeError`` deep inside a traversal.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from vault_lease_revoke.errors import MalformedResponseError


class KeyListing(BaseModel):
    """Payload of a LIST call: ``{"keys": ["a/", "b/"]}``."""

    keys: Optional[list[str]] = None


class LeaseEntry(BaseModel):
    """A single lease as returned by the lease enumeration endpoint.

    Only ``lease_id`` is required. Any other fields the server includes
    (name, namespace_id, error, ...) are retained as extras.
    """

    model_config = ConfigDict(extra="allow")

    lease_id: str

    @property
    def metadata(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class LeaseListing(BaseModel):
    """Payload of the lease enumeration call: ``{"leases": [...]}``."""

    model_config = ConfigDict(extra="ignore")

    leases: Optional[list[LeaseEntry]] = None


def decode_keys(data: object, path: str) -> list[str]:
    """Decode a LIST payload into its keys.

    Parameters
    ----------
    data:
        The ``data`` payload returned by the directory, or None when the
        path holds nothing.
    path:
        The listed path, used in the error message.

    Returns
    -------
    list[str]
        The listed keys, empty when the payload is absent or has no keys.

    Raises
    ------
    MalformedResponseError
        If the payload is not a mapping with a list of strings under ``keys``.
    """
    if data is None:
        return []
    try:
        listing = KeyListing.model_validate(data)
    except ValidationError as exc:
        raise MalformedResponseError(
            f"Malformed key listing at {path!r}: {exc.error_count()} validation error(s)",
            path=path,
        ) from exc
    return list(listing.keys or [])


def decode_leases(data: object, path: str) -> list[LeaseEntry]:
    """Decode a lease enumeration payload.

    Raises
    ------
    MalformedResponseError
        If ``leases`` is not a list of mappings each carrying a string
        ``lease_id``.
    """
    if data is None:
        return []
    try:
        listing = LeaseListing.model_validate(data)
    except ValidationError as exc:
        raise MalformedResponseError(
            f"Malformed lease listing at {path!r}: {exc.error_count()} validation error(s)",
            path=path,
        ) from exc
    return list(listing.leases or [])
