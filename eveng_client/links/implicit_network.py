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
"""
EVE-NG never connects two interfaces directly; a node-to-node link is drawn
as a hidden bridge network with both interfaces bound to it. The network
belongs to the one link that created it and is never shared.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..exceptions import NetworkNotFound
from ..models.network import HIDDEN, VISIBLE, Network

if TYPE_CHECKING:
    from ..models import NetworkManagement

_LOGGER = logging.getLogger(__name__)

NETWORK_TYPE = "bridge"
NETWORK_ICON = "lan.png"


def implicit_network_name(
    source_node_id: int, source_index: int, target_node_id: int, target_index: int
) -> str:
    """Return the name of the implicit network joining two interfaces."""
    return f"{source_node_id}_{source_index}_{target_node_id}_{target_index}"


class ImplicitNetworkManager:
    def __init__(self, networks: NetworkManagement) -> None:
        self._networks = networks

    def create_or_update(
        self, lab: str, existing_network_id: int | None, name: str
    ) -> Network:
        """
        Rename the existing implicit network in place, keeping its bindings,
        or create a new one when there is none or it is gone.

        :param lab: The lab path.
        :param existing_network_id: The implicit network recorded for the link.
        :param name: The name of the network.
        :returns: The live network.
        """
        network = Network(
            id=existing_network_id or 0,
            name=name,
            type=NETWORK_TYPE,
            visibility=VISIBLE,
            left=0,
            top=0,
            icon=NETWORK_ICON,
        )
        if existing_network_id:
            try:
                existing = self._networks.get_network(lab, existing_network_id)
            except NetworkNotFound:
                _LOGGER.info(
                    f"Implicit network {existing_network_id} is gone, creating anew"
                )
            else:
                # a hidden network stays hidden while it is renamed
                network.visibility = existing.visibility
                self._networks.update_network(lab, network)
                _LOGGER.info(f"Updated implicit network {network} in lab {lab}")
                return network
        network.id = 0
        return self._networks.create_network(lab, network)

    def hide(self, lab: str, network: Network) -> None:
        """
        Turn the network into a plain line between its two interfaces.
        Only called once both interfaces are bound.
        """
        if network.hidden:
            return
        network.visibility = HIDDEN
        self._networks.update_network(lab, network)

    def delete(self, lab: str, network_id: int) -> None:
        """Delete the implicit network, which unbinds both of its interfaces."""
        _LOGGER.info(f"Deleting implicit network {network_id} in lab {lab}")
        self._networks.delete_network(lab, network_id)
