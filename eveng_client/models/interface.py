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

from dataclasses import dataclass
from typing import Any


@dataclass
class Interface:
    """
    A node interface as reported by EVE-NG.

    ``network_id`` is 0 when the interface is not bound to any network.
    """

    index: int
    name: str
    network_id: int = 0
    kind: str = "ethernet"

    def __str__(self):
        return f"Interface: {self.name}"

    @property
    def bound(self) -> bool:
        """Check if the interface is bound to a network."""
        return self.network_id != 0

    @classmethod
    def from_dict(cls, index: int, data: dict[str, Any], kind: str = "ethernet"):
        """
        Build an interface from a single entry of the interface listing.

        :param index: The position of the interface on the node.
        :param data: The raw interface data.
        :param kind: Either "ethernet" or "serial".
        """
        return cls(
            index=int(index),
            name=data.get("name", ""),
            network_id=_to_int(data.get("network_id")),
            kind=kind,
        )


def _to_int(value: Any) -> int:
    # the API reports unbound interfaces as 0, "" or null depending on the version
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0
