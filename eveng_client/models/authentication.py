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

import json
import logging
from typing import TYPE_CHECKING, Generator

import httpx

from ..exceptions import APIError, InitializationError

_LOGGER = logging.getLogger(__name__)

if TYPE_CHECKING:
    from ..eveng_client import EveClient


_AUTH_URL = "auth/login"
_LOGOUT_URL = "auth/logout"
_SESSION_COOKIE = "unetlab_session"
# EVE-NG answers 412 when the session cookie has expired
_REAUTH_STATUS_CODES = (httpx.codes.UNAUTHORIZED, httpx.codes.PRECONDITION_FAILED)


def raise_for_status(response: httpx.Response):
    """
    https://github.com/encode/httpx/discussions/2224#discussioncomment-2732372

    When raising for status from certain places, if response is unread, the stream is
    automatically closed, and we then cannot read the response in later error handling.
    We thus need to check if the response is 4/500 and read it preemptively if so.
    """
    if response.status_code // 100 in (4, 5):
        response.read()
    response.raise_for_status()


class SessionAuth(httpx.Auth):
    """
    Cookie session authentication for an httpx session.

    EVE-NG hands out an ``unetlab_session`` cookie on login; the cookie is attached
    to every request and renewed once when the server reports the session expired.
    Modified for httpx based on:
    https://www.python-httpx.org/advanced/#customizing-authentication
    """

    requires_response_body = True

    def __init__(self, client_library: EveClient):
        """
        Initialize the SessionAuth object with a client library instance.

        :param client_library: A client library instance.
        """
        self.client_library = client_library
        self._session_id: str | None = None

    @property
    def session_id(self) -> str:
        """
        Return the session cookie value. If the session has not been established yet,
        log in to the server first.
        """
        if self._session_id is not None:
            return self._session_id

        base_url = self.client_library._session.base_url
        if base_url.scheme != "https":
            _LOGGER.warning(f"Not using https scheme: {base_url.scheme}")
        data = {
            "username": self.client_library.username,
            "password": self.client_library.password,
            "html5": "-1",
        }
        response = self.client_library._session.post(
            _AUTH_URL,
            json=data,
            auth=None,  # type: ignore
        )
        raise_for_status(response)
        session_id = response.cookies.get(_SESSION_COOKIE)
        if not session_id:
            raise InitializationError("Login succeeded but no session cookie was set")
        self._session_id = session_id
        return self._session_id

    @session_id.setter
    def session_id(self, value: str | None) -> None:
        self._session_id = value

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        """
        Implement the authentication flow for the cookie-based authentication.

        :param request: The request object to authenticate.
        :returns: A generator of the authenticated request and response objects.
        """
        request.headers["Cookie"] = f"{_SESSION_COOKIE}={self.session_id}"
        response = yield request

        if response.status_code in _REAUTH_STATUS_CODES:
            _LOGGER.warning(f"re-auth called on {response.status_code}")
            self.session_id = None
            request.headers["Cookie"] = f"{_SESSION_COOKIE}={self.session_id}"
            response = yield request

        raise_for_status(response)

    def logout(self) -> None:
        """Log out the user (invalidate the current session)."""
        if self._session_id is None:
            return
        self.client_library._session.get(_LOGOUT_URL)
        self._session_id = None


class BlankAuth(httpx.Auth):
    """A class that implements an httpx Auth object that does nothing."""

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        response = yield request
        raise_for_status(response)


class CustomClient(httpx.Client):
    _ERROR_PREFIX = {4: "Client error - ", 5: "Server error - "}

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._original_request = self.request
        self.request = self._request

    def _request(self, *args, **kwargs):
        """
        httpx.Client.request modified to raise an exception if the response
        has an HTTP status error, with the message from the EVE-NG envelope.

        :raises APIError: If the response has an HTTP status error.
        """
        try:
            return self._original_request(*args, **kwargs)
        except httpx.HTTPStatusError as error:
            try:
                error_detail = json.loads(error.response.text)["message"]
            except (json.JSONDecodeError, KeyError, TypeError):
                error_detail = error.response.text
            prefix = self._ERROR_PREFIX.get(error.response.status_code // 100, "")
            api_error = APIError(
                f"{prefix}{error_detail or error}",
                request=error.request,
                response=error.response,
            )
            raise api_error from None


def make_session(base_url: str, ssl_verify: bool | str = True) -> httpx.Client:
    """
    Create an httpx Client object with the specified base URL
    and SSL verification setting.

    Note: The base URL is automatically prepended to all HTTP calls. This means you
    should use ``_session.get("status")`` rather than
    ``_session.get(base_url + "status")``.

    :param base_url: The base URL for the client.
    :param ssl_verify: Whether to perform SSL verification.
    :returns: The created httpx Client object.
    """
    return CustomClient(
        base_url=base_url,
        verify=ssl_verify,
        auth=BlankAuth(),
        follow_redirects=True,
        timeout=None,
    )
