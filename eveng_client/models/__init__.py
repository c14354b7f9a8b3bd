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
"""This package contains the EVE-NG client models for nodes,
interfaces, networks, lab topologies and link styles, and the
helpers for authentication and configuration."""

from .authentication import SessionAuth
from .interface import Interface
from .lab import LabManagement
from .network import Network, NetworkManagement
from .node import Node, NodeManagement
from .style import Style

__all__ = (
    "Interface",
    "LabManagement",
    "Network",
    "NetworkManagement",
    "Node",
    "NodeManagement",
    "SessionAuth",
    "Style",
)
