#
# This file is part of eveng-client
# Copyright (c) 2024-2025, the eveng-client authors.
# All rights reserved.
#
# Python bindings and link reconciliation for the EVE-NG emulation platform
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#

from __future__ import annotations

import logging
from typing import NamedTuple
from urllib.parse import urljoin, urlsplit, urlunsplit

import httpx

from .exceptions import InitializationError
from .models import LabManagement, NetworkManagement, NodeManagement, SessionAuth
from .models.authentication import make_session
from .models.configuration import get_configuration
from .utils import get_data, get_url_from_template

_LOGGER = logging.getLogger(__name__)


class ClientConfig(NamedTuple):
    """Stores client configuration, which can be used to create
    any number of identically configured instances of EveClient."""

    url: str | None = None
    username: str | None = None
    password: str | None = None
    ssl_verify: bool | str = True
    allow_http: bool = False
    raise_for_auth_failure: bool = True

    def make_client(self) -> EveClient:
        return EveClient(
            url=self.url,
            username=self.username,
            password=self.password,
            ssl_verify=self.ssl_verify,
            allow_http=self.allow_http,
            raise_for_auth_failure=self.raise_for_auth_failure,
        )


class EveClient:
    """Python bindings for the REST API of an EVE-NG server."""

    _URL_TEMPLATES = {
        "status": "status",
    }

    def __init__(
        self,
        url: str | None = None,
        username: str | None = None,
        password: str | None = None,
        ssl_verify: bool | str = True,
        allow_http: bool = False,
        raise_for_auth_failure: bool = True,
    ) -> None:
        """
        Initialize an EveClient instance. Note that ssl_verify can
        also be a string that points to a cert.

        :param url: URL of the server. It's also possible to pass the
            URL via the ``EVE_HOST`` environment variable or a ``.evengrc`` file.
            If no protocol scheme is provided, "https:" is used.
        :param username: Username of the user to authenticate. It's also possible
            to pass the username via the ``EVE_USER`` variable.
        :param password: Password of the user to authenticate. It's also possible
            to pass the password via the ``EVE_PASSWORD`` variable.
        :param ssl_verify: Path of the SSL server certificate, or True to load
            from the ``EVE_VERIFY_CERT`` environment variable, or False to disable.
        :param allow_http: If set, a https URL will not be enforced.
        :param raise_for_auth_failure: Raise an exception if unable to connect to
            the server. (Use for scripting scenarios.)
        :raises InitializationError: If no URL is provided, authentication fails or host
            can't be reached.
        """
        url, username, password, ssl_verify = get_configuration(
            url, username, password, ssl_verify
        )
        url, base_url = _prepare_url(url, allow_http)
        self.username: str = username
        self.password: str = password
        self.url: str = url
        self.allow_http = allow_http
        self.raise_for_auth_failure = raise_for_auth_failure

        if ssl_verify is False:
            _LOGGER.warning("SSL Verification disabled")

        self._ssl_verify = ssl_verify
        try:
            self._session = make_session(base_url, ssl_verify)
        except httpx.InvalidURL as exc:
            raise InitializationError(exc) from None

        self._session.auth = SessionAuth(self)
        self._version: str | None = None

        self.nodes = NodeManagement(self._session)
        self.networks = NetworkManagement(self._session)
        self.labs = LabManagement(self._session)

        try:
            self._make_test_auth_call()
        except InitializationError as exc:
            if raise_for_auth_failure:
                raise
            _LOGGER.warning(exc)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.url!r})"

    def __str__(self):
        return f"{self.__class__.__name__} URL: {self._session.base_url}"

    def _url_for(self, endpoint, **kwargs):
        """
        Generate the URL for a given API endpoint.

        :param endpoint: The desired endpoint.
        :param **kwargs: Keyword arguments used to format the URL.
        :returns: The formatted URL.
        """
        return get_url_from_template(endpoint, self._URL_TEMPLATES, kwargs)

    def _make_test_auth_call(self) -> None:
        """
        Log in and read the server status to confirm that authentication works.

        :raises InitializationError: If authentication fails.
        """
        try:
            self.status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            if status_code in (httpx.codes.UNAUTHORIZED, httpx.codes.BAD_REQUEST):
                message = (
                    "Unable to authenticate, please check your username and password"
                )
                raise InitializationError(message)
            raise
        except httpx.HTTPError as exc:
            raise InitializationError(exc)

    def logout(self) -> None:
        """Invalidate the current session."""
        self._session.auth.logout()

    def get_host(self) -> str:
        """
        Return the hostname of the session to the server.

        :returns: The hostname.
        """
        return self._session.base_url.host

    def status(self) -> dict:
        """
        Get the server status (version, resource usage).

        :returns: The status data.
        """
        url = self._url_for("status")
        data = get_data(self._session.get(url)) or {}
        self._version = data.get("version", "")
        return data

    @property
    def version(self) -> str:
        """Return the version string reported by the server."""
        if self._version is None:
            self.status()
        return self._version

    def is_pro(self) -> bool:
        """
        Check if the server runs the Professional edition, which is required
        for link styles. Pro releases carry a ``-PRO`` version suffix.
        """
        return "PRO" in self.version.upper().split("-")


def _prepare_url(url: str, allow_http: bool) -> tuple[str, str]:
    # prepare the URL
    try:
        url_parts = urlsplit(url, "https")
    except ValueError:
        message = "invalid URL / hostname"
        raise InitializationError(message)

    # https://docs.python.org/3/library/urllib.parse.html
    # Following the syntax specifications in RFC 1808, urlparse recognizes
    # a netloc only if it is properly introduced by ‘//’. Otherwise, the
    # input is presumed to be a relative URL and thus to start with
    # a path component.
    if len(url_parts.netloc) == 0:
        try:
            url_parts = urlsplit("//" + url, "https")
        except ValueError:
            message = "invalid URL / hostname"
            raise InitializationError(message)

    if not allow_http and url_parts.scheme == "http":
        message = "invalid URL scheme (must be https)"
        raise InitializationError(message)
    if url_parts.scheme not in ("http", "https"):
        message = "invalid URL scheme (should be https)"
        raise InitializationError(message)
    url = urlunsplit(url_parts)
    if not url.endswith("/"):
        url += "/"
    base_url = urljoin(url, "api/")
    return url, base_url
