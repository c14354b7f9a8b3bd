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
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..exceptions import NetworkNotFound
from ..utils import get_data, get_url_from_template, not_found_as

if TYPE_CHECKING:
    import httpx

_LOGGER = logging.getLogger(__name__)

VISIBLE = 1
HIDDEN = 0


@dataclass
class Network:
    """
    An EVE-NG network. Interfaces are connected to each other only through
    networks; a hidden network (visibility 0) is drawn as a plain line
    between two nodes instead of a cloud.
    """

    id: int = 0
    name: str = ""
    type: str = "bridge"
    visibility: int = VISIBLE
    left: int = 0
    top: int = 0
    icon: str = "lan.png"

    def __str__(self):
        return f"Network: {self.name} ({self.id})"

    @property
    def hidden(self) -> bool:
        return self.visibility == HIDDEN

    def as_dict(self) -> dict[str, Any]:
        """Convert the network to the payload accepted by the API."""
        return {
            "name": self.name,
            "type": self.type,
            "visibility": self.visibility,
            "left": self.left,
            "top": self.top,
            "icon": self.icon,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Network:
        return cls(
            id=int(data.get("id", 0)),
            name=data.get("name", ""),
            type=data.get("type", "bridge"),
            visibility=int(data.get("visibility", VISIBLE)),
            left=int(data.get("left", 0)),
            top=int(data.get("top", 0)),
            icon=data.get("icon", "lan.png"),
        )


class NetworkManagement:
    _URL_TEMPLATES = {
        "networks": "labs{lab}/networks",
        "network": "labs{lab}/networks/{network_id}",
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

    def get_network(self, lab: str, network_id: int) -> Network:
        """
        Get a network of a lab.

        :param lab: The lab path.
        :param network_id: The ID of the network.
        :returns: The network.
        :raises NetworkNotFound: If the network does not exist.
        """
        if not network_id:
            raise NetworkNotFound(network_id)
        url = self._url_for("network", lab=lab, network_id=network_id)
        with not_found_as(NetworkNotFound, network_id):
            data = get_data(self._session.get(url))
        if not data:
            raise NetworkNotFound(network_id)
        data.setdefault("id", network_id)
        return Network.from_dict(data)

    def create_network(self, lab: str, network: Network) -> Network:
        """
        Create a network. The ID assigned by the server is set on `network`.

        :param lab: The lab path.
        :param network: The network to create.
        :returns: The created network.
        """
        url = self._url_for("networks", lab=lab)
        data = get_data(self._session.post(url, json=network.as_dict())) or {}
        network.id = int(data.get("id", 0))
        _LOGGER.info(f"Created network {network} in lab {lab}")
        return network

    def update_network(self, lab: str, network: Network) -> None:
        """
        Push all attributes of an existing network to the server.

        :param lab: The lab path.
        :param network: The network to update.
        """
        url = self._url_for("network", lab=lab, network_id=network.id)
        with not_found_as(NetworkNotFound, network.id):
            self._session.put(url, json=network.as_dict())

    def delete_network(self, lab: str, network_id: int) -> None:
        """
        Delete a network; interfaces bound to it become unbound.

        :param lab: The lab path.
        :param network_id: The ID of the network.
        """
        url = self._url_for("network", lab=lab, network_id=network_id)
        with not_found_as(NetworkNotFound, network_id):
            self._session.delete(url)
        _LOGGER.info(f"Deleted network {network_id} in lab {lab}")
