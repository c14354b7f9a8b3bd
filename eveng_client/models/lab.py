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

from typing import TYPE_CHECKING, Any

from ..exceptions import LabNotFound
from ..utils import get_data, get_url_from_template, not_found_as

if TYPE_CHECKING:
    import httpx


class LabManagement:
    _URL_TEMPLATES = {
        "topology": "labs{lab}/topology",
    }

    def __init__(self, session: httpx.Client) -> None:
        self._session = session

    def _url_for(self, endpoint, **kwargs):
        """
        Generate the URL for a given API endpoint.

        :param endpoint: The desired endpoint.
        :param **kwargs: Keyword arguments used to format the URL.
        :returns: The formatted URL.
        """
        return get_url_from_template(endpoint, self._URL_TEMPLATES, kwargs)

    def get_topology(self, lab: str) -> list[dict[str, Any]]:
        """
        Get the drawn topology of a lab: one loosely typed entry per
        connection, with all values reported as strings.

        :param lab: The lab path.
        :returns: A list of topology entries.
        :raises LabNotFound: If the lab does not exist.
        """
        url = self._url_for("topology", lab=lab)
        with not_found_as(LabNotFound, lab):
            data = get_data(self._session.get(url))
        if not data:
            return []
        if isinstance(data, dict):
            # keyed by position on some releases
            return list(data.values())
        return list(data)
