"""Directory clients — the remote key space the core components walk.

:class:`DirectoryClient` is the abstract capability set consumed by the
report aggregator and the batch revoker. :class:`HvacDirectoryClient`
implements it on top of :class:`hvac.Client`, which supplies
authentication, transport and the wire protocol.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import hvac
import requests
from hvac import exceptions as hvac_exceptions

from vault_lease_revoke.errors import DirectoryError

logger = logging.getLogger(__name__)


class DirectoryClient(ABC):
    """Abstract base class for remote directory backends.

    Every method returns the ``data`` payload of the response, or None when
    the path holds no data. Absence is not an error; transport and
    authorization failures raise :class:`DirectoryError`.
    """

    @abstractmethod
    def list(self, path: str) -> dict[str, Any] | None:
        """List the keys directly under *path*.

        Parameters
        ----------
        path:
            Directory path without a leading slash, e.g. ``sys/leases/lookup``.

        Returns
        -------
        dict | None
            A payload of the form ``{"keys": [...]}``, or None.

        Raises
        ------
        DirectoryError
            If the call fails.
        """

    @abstractmethod
    def read_with_data(
        self, path: str, query: dict[str, list[str]]
    ) -> dict[str, Any] | None:
        """Read *path* passing *query* as request parameters.

        Raises
        ------
        DirectoryError
            If the call fails.
        """

    @abstractmethod
    def write(self, path: str, payload: dict[str, Any] | None = None) -> dict[str, Any] | None:
        """Write *payload* (possibly empty) to *path*.

        Raises
        ------
        DirectoryError
            If the server answers with an error.
        """


class HvacDirectoryClient(DirectoryClient):
    """DirectoryClient backed by an :class:`hvac.Client`.

    Parameters
    ----------
    client:
        A configured hvac client. Its adapter is used directly for the
        calls hvac has no dedicated helper for.
    """

    def __init__(self, client: hvac.Client) -> None:
        self._client = client

    def list(self, path: str) -> dict[str, Any] | None:
        try:
            response = self._client.list(path)
        except (hvac_exceptions.VaultError, requests.exceptions.RequestException) as exc:
            raise DirectoryError(f"LIST {path} failed: {exc}", path=path) from exc
        return _data_of(response)

    def read_with_data(
        self, path: str, query: dict[str, list[str]]
    ) -> dict[str, Any] | None:
        try:
            response = self._client.adapter.get(f"/v1/{path}", params=query)
        except hvac_exceptions.InvalidPath:
            logger.debug("Nothing found at %s", path)
            return None
        except (hvac_exceptions.VaultError, requests.exceptions.RequestException) as exc:
            raise DirectoryError(f"GET {path} failed: {exc}", path=path) from exc
        return _data_of(response)

    def write(self, path: str, payload: dict[str, Any] | None = None) -> dict[str, Any] | None:
        kwargs: dict[str, Any] = {}
        if payload:
            kwargs["json"] = payload
        try:
            response = self._client.adapter.put(f"/v1/{path}", **kwargs)
        except (hvac_exceptions.VaultError, requests.exceptions.RequestException) as exc:
            raise DirectoryError(f"PUT {path} failed: {exc}", path=path) from exc
        return _data_of(response)


def _data_of(response: object) -> Any:
    """Return the ``data`` payload of a decoded Vault response.

    hvac hands back the raw :class:`requests.Response` for bodiless answers
    (HTTP 204), which carry no data.
    """
    if not isinstance(response, dict):
        return None
    return response.get("data")
