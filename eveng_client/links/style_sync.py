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

from ..exceptions import APIError, LabNotFound
from ..models.style import Style

if TYPE_CHECKING:
    from ..models import LabManagement, NodeManagement

_LOGGER = logging.getLogger(__name__)


class StyleSynchronizer:
    def __init__(self, nodes: NodeManagement, labs: LabManagement) -> None:
        """
        Keeps the decoration of a node-to-node link in sync. The style lives on
        the target interface: it is written per interface, but can only be read
        back by scanning the whole lab topology.

        :param nodes: The node operations of the client.
        :param labs: The lab operations of the client.
        """
        self._nodes = nodes
        self._labs = labs

    def write(self, lab: str, target_node_id: int, target_port: str, style: Style):
        """
        Apply a style to the target interface of a link. Failures are logged;
        the link itself is already in place at this point.
        """
        try:
            self._nodes.update_interface_style(lab, target_node_id, target_port, style)
        except APIError as exc:
            _LOGGER.error(
                f"Failed to update style of port {target_port} "
                f"of node {target_node_id}: {exc}"
            )

    def read(self, lab: str, target_node_id: int, target_port: str) -> Style:
        """
        Read the style of a link back from the lab topology.

        :param lab: The lab path.
        :param target_node_id: The node at the target end of the link.
        :param target_port: The port at the target end of the link.
        :returns: The parsed style, or an empty style if the topology has no
            entry for the target interface.
        """
        try:
            topology = self._labs.get_topology(lab)
        except (APIError, LabNotFound) as exc:
            _LOGGER.error(f"Failed to get topology of lab {lab}: {exc}")
            return Style()

        source = f"node{target_node_id}"
        for entry in topology:
            entry_source = entry.get("source")
            source_label = entry.get("source_label")
            if not isinstance(entry_source, str) or not isinstance(source_label, str):
                continue
            if entry_source == source and source_label == target_port:
                return Style.from_topology(entry)
        _LOGGER.debug(f"No topology entry for port {target_port} of {source}")
        return Style()
