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
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models import NodeManagement

_LOGGER = logging.getLogger(__name__)


class InterfaceBinder:
    def __init__(self, nodes: NodeManagement) -> None:
        """
        Binds single node interfaces to networks. Every link operation
        is composed from these calls.

        :param nodes: The node operations of the client.
        """
        self._nodes = nodes

    def bind(self, lab: str, node_id: int, port: str, network_id: int) -> None:
        """
        Bind an interface to a network. Binding an interface to the network
        it is already bound to leaves it unchanged.

        :param lab: The lab path.
        :param node_id: The ID of the node.
        :param port: The port name.
        :param network_id: The ID of the network, 0 to unbind.
        """
        _LOGGER.info(f"Binding port {port} of node {node_id} to network {network_id}")
        self._nodes.update_interface_binding(lab, node_id, port, network_id)

    def unbind(self, lab: str, node_id: int, port: str) -> None:
        """Unbind an interface from whatever network it is bound to."""
        self.bind(lab, node_id, port, 0)

    def release(
        self, lab: str, node_id: int, port: str, expected_network_id: int | None
    ) -> bool:
        """
        Unbind an interface, but only while it is still bound to the network
        this link put it on. A binding to any other network was made by
        someone else and is left alone.

        :param lab: The lab path.
        :param node_id: The ID of the node.
        :param port: The port name.
        :param expected_network_id: The network the interface was bound to.
        :returns: Whether the interface was unbound.
        """
        if not expected_network_id:
            _LOGGER.debug(
                f"Not releasing port {port} of node {node_id}: no known network"
            )
            return False
        _, interface = self._nodes.get_interface(lab, node_id, port)
        if interface.network_id != expected_network_id:
            _LOGGER.debug(
                f"Not releasing port {port} of node {node_id}: bound to network "
                f"{interface.network_id}, expected {expected_network_id}"
            )
            return False
        self.unbind(lab, node_id, port)
        return True
