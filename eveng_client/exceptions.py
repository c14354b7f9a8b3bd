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

from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from .links.state import LinkState


class EveException(Exception):
    pass


class InitializationError(EveException):
    pass


class ElementNotFound(EveException, KeyError):
    pass


class NodeNotFound(ElementNotFound):
    pass


class NetworkNotFound(ElementNotFound):
    pass


class InterfaceNotFound(ElementNotFound):
    pass


class LabNotFound(ElementNotFound):
    pass


class InvalidProperty(EveException):
    pass


class LinkError(EveException):
    pass


class LinkConfigurationError(LinkError):
    pass


class SelfLinkError(LinkConfigurationError):
    pass


class LinkDriftError(LinkError):
    def __init__(self, message: str, state: LinkState | None = None) -> None:
        """
        Raised when an observed link endpoint disagrees with the persisted record.

        :param message: Description of the offending endpoint.
        :param state: The observed link state, with the offending fields cleared.
        """
        super().__init__(message)
        self.state = state


class APIError(EveException, httpx.HTTPStatusError):
    pass
