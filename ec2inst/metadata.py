"""
EC2 Instance Metadata Service access.

Fetches the instance identity document from IMDS, preferring an IMDSv2 session
token and falling back to IMDSv1 requests when no token can be obtained.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from . import config
from .exceptions import IdentityFetchError, MetadataUnavailableError
from .models import IdentitySnapshot


class InstanceMetadataClient:
    """Client for the local EC2 Instance Metadata Service."""

    def __init__(
        self,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.endpoint = (endpoint or config.get_imds_endpoint()).rstrip("/")
        self.timeout = timeout if timeout is not None else config.get_imds_timeout()
        self.session = session or requests.Session()
        self._token: Optional[str] = None
        self._token_requested = False

    def __enter__(self) -> InstanceMetadataClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def _url(self, path: str) -> str:
        return f"{self.endpoint}{path}"

    def _get_token(self) -> Optional[str]:
        """Request an IMDSv2 token once; None means IMDSv1 is used."""
        if self._token_requested:
            return self._token
        self._token_requested = True
        try:
            response = self.session.put(
                self._url(config.IMDS_TOKEN_PATH),
                headers={config.IMDS_TOKEN_TTL_HEADER: str(config.IMDS_TOKEN_TTL_SECONDS)},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            logging.info("Could not get IMDSv2 token, falling back to IMDSv1: %s", exc)
            return None
        self._token = response.text
        return self._token

    def _get(self, path: str) -> requests.Response:
        headers = {}
        token = self._get_token()
        if token:
            headers[config.IMDS_TOKEN_HEADER] = token
        response = self.session.get(self._url(path), headers=headers, timeout=self.timeout)
        response.raise_for_status()
        return response

    def available(self) -> bool:
        """Return True if the metadata service answers an instance-id probe."""
        try:
            self._get(config.IMDS_PROBE_PATH)
        except requests.RequestException as exc:
            logging.info("Instance metadata probe failed: %s", exc)
            return False
        return True

    def get_identity_document(self) -> dict[str, Any]:
        """
        Fetch and parse the instance identity document.

        Raises:
            requests.RequestException: If the request fails.
            ValueError: If the body is not a JSON object.
        """
        response = self._get(config.IMDS_IDENTITY_DOCUMENT_PATH)
        document = response.json()
        if not isinstance(document, dict):
            raise ValueError("identity document is not a JSON object")
        return document


def fetch_identity_snapshot(client: InstanceMetadataClient) -> IdentitySnapshot:
    """
    Check metadata availability and build the IdentitySnapshot.

    Raises:
        MetadataUnavailableError: If IMDS does not answer.
        IdentityFetchError: If the identity document cannot be fetched or parsed,
            or lacks the instance ID or region.
    """
    if not client.available():
        raise MetadataUnavailableError()
    try:
        document = client.get_identity_document()
    except (requests.RequestException, ValueError) as exc:
        raise IdentityFetchError(exc) from exc
    snapshot = IdentitySnapshot.from_document(document)
    required = {"instanceId": snapshot.instance_id, "region": snapshot.region}
    missing = [name for name, value in required.items() if not value]
    if missing:
        raise IdentityFetchError(f"document has no {', '.join(missing)}")
    logging.info("Identity document loaded for %s in %s", snapshot.instance_id, snapshot.region)
    return snapshot
