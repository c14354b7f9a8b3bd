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

from contextlib import contextmanager
from typing import Any, Iterator, Type

import httpx

from .exceptions import ElementNotFound, EveException


def get_url_from_template(
    endpoint: str, url_templates: dict[str, str], values: dict | None = None
) -> str:
    """
    Generate the URL for a given API endpoint from given templates.

    :param endpoint: The desired endpoint.
    :param url_templates: The templates to map values to.
    :param values: Keyword arguments used to format the URL.
    :returns: The formatted URL.
    """
    endpoint_url_template = url_templates.get(endpoint)
    if endpoint_url_template is None:
        raise EveException(f"Invalid endpoint: {endpoint}")
    if values is None:
        values = {}
    if "lab" in values:
        values["lab"] = normalize_lab_path(values["lab"])
    return endpoint_url_template.format(**values)


def normalize_lab_path(lab_path: str) -> str:
    """
    Return the lab path in the form the API expects inside URLs,
    i.e. with exactly one leading slash: ``/folder/lab.unl``.
    """
    return "/" + lab_path.strip().lstrip("/")


def get_data(response: httpx.Response) -> Any:
    """
    Unwrap the ``data`` member of an EVE-NG response envelope.

    The API answers with ``{"code": ..., "status": ..., "message": ..., "data": ...}``;
    some endpoints omit ``data`` entirely, in which case None is returned.
    """
    body = response.json()
    if isinstance(body, dict):
        return body.get("data")
    return body


@contextmanager
def not_found_as(error: Type[ElementNotFound], element_id: Any) -> Iterator[None]:
    """
    Translate a 404 answer raised inside the block into `error`.

    :param error: The ElementNotFound subclass to raise.
    :param element_id: The identifier reported in the raised error.
    """
    try:
        yield
    except httpx.HTTPStatusError as exc:
        if exc.response.status_code == httpx.codes.NOT_FOUND:
            raise error(element_id) from exc
        raise
