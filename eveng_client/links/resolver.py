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

from ..exceptions import LinkConfigurationError, SelfLinkError
from .state import LinkDeclaration, LinkShape

_LOGGER = logging.getLogger(__name__)


def resolve(declaration: LinkDeclaration) -> LinkShape:
    """
    Validate a link declaration and determine its shape.
    Nothing here talks to the server.

    :param declaration: The declared link.
    :returns: The shape of the link.
    :raises LinkConfigurationError: If the target is declared both as a network
        and as a node, or not at all, if a target node lacks a port, or if
        the network ID is not positive.
    :raises SelfLinkError: If the source and target node are the same.
    :raises InvalidProperty: If the declared style has unknown values.
    """
    has_network = declaration.network_id is not None
    has_target_node = declaration.target_node_id is not None
    has_target_port = bool(declaration.target_port)

    if has_network and (has_target_node or has_target_port):
        raise LinkConfigurationError(
            "network_id and target_node_id/target_port are mutually exclusive"
        )
    if has_target_node != has_target_port:
        raise LinkConfigurationError(
            "target_node_id and target_port must be declared together"
        )
    if has_network and declaration.network_id <= 0:
        raise LinkConfigurationError(
            f"Invalid network_id {declaration.network_id}, must be positive"
        )
    if not has_network and not has_target_node:
        raise LinkConfigurationError(
            "Either network_id or target_node_id/target_port must be declared"
        )
    if has_target_node and declaration.source_node_id == declaration.target_node_id:
        raise SelfLinkError(
            f"Cannot link a node to itself: source and target node IDs "
            f"are both {declaration.source_node_id}"
        )
    if declaration.style is not None:
        declaration.style.validate()

    shape = LinkShape.NODE_TO_NETWORK if has_network else LinkShape.NODE_TO_NODE
    _LOGGER.debug(f"{declaration} resolved as {shape.value}")
    return shape
