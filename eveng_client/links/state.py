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

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional

from ..models.style import Style


class LinkShape(Enum):
    NODE_TO_NETWORK = "node-to-network"
    NODE_TO_NODE = "node-to-node"


@dataclass
class LinkDeclaration:
    """
    A link as the user declares it: a source interface connected either to an
    existing network (`network_id`) or to the interface of another node
    (`target_node_id` and `target_port`).
    """

    lab_path: str
    source_node_id: int
    source_port: str
    network_id: Optional[int] = None
    target_node_id: Optional[int] = None
    target_port: Optional[str] = None
    style: Optional[Style] = None

    def __str__(self):
        target = (
            f"network {self.network_id}"
            if self.network_id is not None
            else f"node {self.target_node_id} port {self.target_port}"
        )
        return (
            f"Link: node {self.source_node_id} port {self.source_port} -> {target}"
        )


@dataclass
class LinkState:
    """
    The persisted record of a link between reconciliation passes.

    `network_id` is the network actually in effect: the user's network for a
    node-to-network link, the implicit hidden network for a node-to-node link,
    or None while unresolved.
    """

    lab_path: str
    source_node_id: int
    source_port: str
    network_id: Optional[int] = None
    target_node_id: Optional[int] = None
    target_port: Optional[str] = None
    style: Optional[Style] = None

    def __str__(self):
        return (
            f"Link: node {self.source_node_id} port {self.source_port} "
            f"on network {self.network_id}"
        )

    @property
    def shape(self) -> LinkShape:
        if self.target_node_id is None:
            return LinkShape.NODE_TO_NETWORK
        return LinkShape.NODE_TO_NODE

    @property
    def resolved(self) -> bool:
        """Check if the network in effect is known."""
        return self.network_id is not None

    def copy(self, **changes: Any) -> LinkState:
        return replace(self, **changes)

    @classmethod
    def from_declaration(
        cls, declaration: LinkDeclaration, network_id: int | None
    ) -> LinkState:
        return cls(
            lab_path=declaration.lab_path,
            source_node_id=declaration.source_node_id,
            source_port=declaration.source_port,
            network_id=network_id,
            target_node_id=declaration.target_node_id,
            target_port=declaration.target_port,
            style=declaration.style,
        )

    def as_dict(self) -> dict[str, Any]:
        """
        Convert the link state to its persisted representation.

        :returns: A dictionary representation of the link state.
        """
        return {
            "lab_path": self.lab_path,
            "network_id": self.network_id,
            "source_node_id": self.source_node_id,
            "source_port": self.source_port,
            "target_node_id": self.target_node_id,
            "target_port": self.target_port,
            "style": self.style.as_dict() if self.style is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LinkState:
        return cls(
            lab_path=data["lab_path"],
            source_node_id=data["source_node_id"],
            source_port=data["source_port"],
            network_id=data.get("network_id"),
            target_node_id=data.get("target_node_id"),
            target_port=data.get("target_port"),
            style=Style.from_dict(data.get("style")),
        )
