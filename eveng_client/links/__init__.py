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
"""Reconciliation of declared links against the interfaces and networks
of an EVE-NG lab."""

from .binder import InterfaceBinder
from .implicit_network import ImplicitNetworkManager, implicit_network_name
from .reconciler import LinkReconciler
from .resolver import resolve
from .state import LinkDeclaration, LinkShape, LinkState
from .style_sync import StyleSynchronizer

__all__ = (
    "ImplicitNetworkManager",
    "InterfaceBinder",
    "LinkDeclaration",
    "LinkReconciler",
    "LinkShape",
    "LinkState",
    "StyleSynchronizer",
    "implicit_network_name",
    "resolve",
)
