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
"""Login settings from arguments, .evengrc files and the environment."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

from ..exceptions import InitializationError

_CONFIG_FILE_NAME = ".evengrc"

_REQUIRED = (
    ("host", "EVE_HOST", "URL", "url"),
    ("username", "EVE_USER", "username", "username"),
    ("password", "EVE_PASSWORD", "password", "password"),
)


def _read_evengrc(directory: Path) -> dict[str, str]:
    evengrc = directory / _CONFIG_FILE_NAME
    if not evengrc.is_file():
        return {}
    settings = {}
    for line in evengrc.read_text().splitlines():
        name, sep, value = line.partition("=")
        name = name.strip()
        if not sep or name in settings:
            continue
        value = value.strip()
        if len(value) > 1 and value[0] == value[-1] == '"':
            value = value[1:-1]
        settings[name] = value
    return settings


def _local_directories() -> Iterator[Path]:
    cwd = Path.cwd()
    yield cwd
    yield from cwd.parents


def _lookup(name: str) -> str | None:
    """Find a setting in the nearest .evengrc, the environment or ~/.evengrc."""
    for directory in _local_directories():
        if value := _read_evengrc(directory).get(name):
            return value
    return os.getenv(name) or _read_evengrc(Path.home()).get(name) or None


def get_configuration(
    host: str | None, username: str | None, password: str | None, ssl_verify: bool | str
) -> tuple[str, str, str, bool | str]:
    """
    Get the login configuration. A value passed as an argument wins;
    otherwise it is taken from the first of: a .evengrc in the current
    directory or one of its parents, the environment, ~/.evengrc.

    :param host: The host address of the EVE-NG server.
    :param username: The username.
    :param password: The password.
    :param ssl_verify: The CA bundle path or boolean value indicating SSL verification.
    :returns: A tuple containing the host, username, password,
        and SSL verification information.
    :raises InitializationError: If the host, username or password cannot be found.
    """
    given = {"host": host, "username": username, "password": password}
    for key, variable, label, argument in _REQUIRED:
        given[key] = given[key] or _lookup(variable)
        if not given[key]:
            raise InitializationError(
                f"No {label} provided. Set the {argument} argument or {variable}."
            )

    if ssl_verify is True:
        ssl_verify = _lookup("EVE_VERIFY_CERT") or True
        if isinstance(ssl_verify, str) and ssl_verify.lower() == "false":
            ssl_verify = False

    return given["host"], given["username"], given["password"], ssl_verify
