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
from typing import TYPE_CHECKING, Any, Iterator

from ..exceptions import InterfaceNotFound, NodeNotFound
from ..utils import get_data, get_url_from_template, not_found_as
from .interface import Interface

if TYPE_CHECKING:
    import httpx

    from .style import Style

_LOGGER = logging.getLogger(__name__)

_INTERFACE_KINDS = ("ethernet", "serial")


@dataclass
class Node:
    """A node of an EVE-NG lab, as much of it as the link engine needs."""

    id: int
    name: str = ""
    type: str = ""
    template: str = ""

    def __str__(self):
        return f"Node: {self.name or self.id}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Node:
        return cls(
            id=int(data["id"]),
            name=data.get("name", ""),
            type=data.get("type", ""),
            template=data.get("template", ""),
        )


class NodeManagement:
    _URL_TEMPLATES = {
        "node": "labs{lab}/nodes/{node_id}",
        "interfaces": "labs{lab}/nodes/{node_id}/interfaces",
        "interface_style": "labs{lab}/nodes/{node_id}/interfaces/{index}/style",
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

    def get_node(self, lab: str, node_id: int) -> Node:
        """
        Get a node of a lab.

        :param lab: The lab path, e.g. ``/folder/lab.unl``.
        :param node_id: The ID of the node.
        :returns: The node.
        :raises NodeNotFound: If the node does not exist.
        """
        url = self._url_for("node", lab=lab, node_id=node_id)
        with not_found_as(NodeNotFound, node_id):
            data = get_data(self._session.get(url))
        if not data:
            raise NodeNotFound(node_id)
        data.setdefault("id", node_id)
        return Node.from_dict(data)

    def interfaces(self, lab: str, node_id: int) -> list[Interface]:
        """
        Get all interfaces of a node, ethernet interfaces first.

        :param lab: The lab path.
        :param node_id: The ID of the node.
        :returns: A list of interfaces.
        :raises NodeNotFound: If the node does not exist.
        """
        url = self._url_for("interfaces", lab=lab, node_id=node_id)
        with not_found_as(NodeNotFound, node_id):
            data = get_data(self._session.get(url)) or {}
        result = []
        for kind in _INTERFACE_KINDS:
            for index, entry in _enumerate_listing(data.get(kind)):
                result.append(Interface.from_dict(index, entry, kind))
        return result

    def get_interface(self, lab: str, node_id: int, port: str) -> tuple[int, Interface]:
        """
        Look up an interface of a node by its port name.

        :param lab: The lab path.
        :param node_id: The ID of the node.
        :param port: The port name, e.g. ``e0``.
        :returns: A tuple of the interface index and the interface.
        :raises InterfaceNotFound: If the node has no interface with that name.
        """
        for interface in self.interfaces(lab, node_id):
            if interface.name == port:
                return interface.index, interface
        raise InterfaceNotFound(f"{port} on node {node_id}")

    def update_interface_binding(
        self, lab: str, node_id: int, port: str, network_id: int
    ) -> None:
        """
        Bind an interface to a network, or unbind it when `network_id` is 0.

        :param lab: The lab path.
        :param node_id: The ID of the node.
        :param port: The port name.
        :param network_id: The ID of the network, 0 to unbind.
        """
        index, _ = self.get_interface(lab, node_id, port)
        url = self._url_for("interfaces", lab=lab, node_id=node_id)
        _LOGGER.debug(f"Setting interface {port} of node {node_id}: {network_id}")
        self._session.put(url, json={str(index): network_id or ""})

    def update_interface_style(
        self, lab: str, node_id: int, port: str, style: Style
    ) -> None:
        """
        Set the link decoration drawn at an interface (EVE-NG Pro only).

        :param lab: The lab path.
        :param node_id: The ID of the node.
        :param port: The port name.
        :param style: The style to apply.
        """
        index, _ = self.get_interface(lab, node_id, port)
        url = self._url_for("interface_style", lab=lab, node_id=node_id, index=index)
        self._session.put(url, json=style.as_payload())


def _enumerate_listing(listing: Any) -> Iterator[tuple[int, dict]]:
    # older releases return interfaces as a list, newer ones as an index-keyed object
    if not listing:
        return
    if isinstance(listing, dict):
        for index, entry in sorted(listing.items(), key=lambda item: int(item[0])):
            yield int(index), entry
    else:
        yield from enumerate(listing)
