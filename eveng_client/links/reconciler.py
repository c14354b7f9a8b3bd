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

from ..exceptions import (
    InterfaceNotFound,
    LinkDriftError,
    LinkError,
    NetworkNotFound,
    NodeNotFound,
)
from .binder import InterfaceBinder
from .implicit_network import ImplicitNetworkManager, implicit_network_name
from .resolver import resolve
from .state import LinkDeclaration, LinkShape, LinkState
from .style_sync import StyleSynchronizer

if TYPE_CHECKING:
    from ..eveng_client import EveClient

_LOGGER = logging.getLogger(__name__)

_ENDS = ("source", "target")


class LinkReconciler:
    def __init__(self, client: EveClient) -> None:
        """
        Turns link declarations into interface bindings on the server and
        checks persisted links against what the server reports.

        Each call is one sequential pass that stops at the first failing
        remote call. Steps are ordered so that an interrupted pass leaves
        nothing bound twice: old bindings are released before new ones are
        made, and an implicit network is hidden only after both of its
        interfaces are bound.

        :param client: An EveClient, or any object offering the same
            ``nodes``, ``networks``, ``labs`` and ``is_pro()``.
        """
        self._client = client
        self._nodes = client.nodes
        self._networks = client.networks
        self.binder = InterfaceBinder(client.nodes)
        self.implicit_networks = ImplicitNetworkManager(client.networks)
        self.styles = StyleSynchronizer(client.nodes, client.labs)

    def create(self, declaration: LinkDeclaration) -> LinkState:
        """
        Establish a declared link.

        :param declaration: The declared link.
        :returns: The state to persist.
        :raises LinkConfigurationError: If the declaration is invalid.
        :raises LinkError: If no network ID resulted.
        """
        shape = resolve(declaration)
        if shape is LinkShape.NODE_TO_NETWORK:
            network_id = self._apply_network_link(declaration, None)
        else:
            network_id = self._apply_node_link(declaration, None, None)
        _LOGGER.info(f"Created {declaration} in lab {declaration.lab_path}")
        return self._finish(declaration, network_id)

    def read(self, state: LinkState) -> LinkState | None:
        """
        Compare a persisted link with the server. The server is not modified.

        :param state: The persisted state.
        :returns: The observed state, or None if the link's network is gone
            and the link has to be created again.
        :raises LinkDriftError: If an endpoint no longer matches; the error
            carries the observed state with the offending fields cleared.
        """
        try:
            self._networks.get_network(state.lab_path, state.network_id)
        except NetworkNotFound:
            _LOGGER.info(f"Network {state.network_id} is gone, recreating {state}")
            return None

        observed = state.copy()
        if observed.shape is LinkShape.NODE_TO_NETWORK:
            self._observe_network_link(observed)
        else:
            self._observe_node_link(observed)

        if observed.style is not None and self._style_supported(observed):
            observed.style = self.styles.read(
                observed.lab_path, observed.target_node_id, observed.target_port
            )
        return observed

    def update(self, previous: LinkState, declaration: LinkDeclaration) -> LinkState:
        """
        Move a link from its persisted state to a new declaration.

        :param previous: The persisted state.
        :param declaration: The new declaration.
        :returns: The state to persist.
        """
        shape = resolve(declaration)
        lab = declaration.lab_path
        if shape is LinkShape.NODE_TO_NETWORK:
            network_id = self._apply_network_link(declaration, previous)
            if previous.shape is LinkShape.NODE_TO_NODE and previous.resolved:
                _LOGGER.info(f"Link changed from node to network in lab {lab}")
                self._retire_implicit_network(previous, declaration)
        else:
            reusable_network_id = None
            if previous.shape is LinkShape.NODE_TO_NODE:
                reusable_network_id = previous.network_id
            else:
                # the previous network belongs to the user, never adopt it
                _LOGGER.info(f"Link changed from network to node in lab {lab}")
            network_id = self._apply_node_link(
                declaration, previous, reusable_network_id
            )
        _LOGGER.info(f"Updated {declaration} in lab {lab}")
        return self._finish(declaration, network_id)

    def delete(self, state: LinkState) -> None:
        """
        Tear a link down. A node-to-node link deletes its implicit network;
        a node-to-network link only releases its source interface.

        A missing source node or port counts as already released.

        :param state: The persisted state.
        """
        lab = state.lab_path
        if not state.resolved:
            _LOGGER.debug(f"{state} was never resolved, nothing to delete")
            return
        if state.shape is LinkShape.NODE_TO_NODE:
            try:
                self.implicit_networks.delete(lab, state.network_id)
            except NetworkNotFound:
                _LOGGER.info(f"Implicit network {state.network_id} already deleted")
            return
        if not state.source_node_id or not state.source_port:
            return
        try:
            self.binder.release(
                lab, state.source_node_id, state.source_port, state.network_id
            )
        except (NodeNotFound, InterfaceNotFound):
            _LOGGER.info(
                f"Port {state.source_port} of node {state.source_node_id} is gone, "
                f"nothing to release"
            )

    def _finish(
        self, declaration: LinkDeclaration, network_id: int | None
    ) -> LinkState:
        if not network_id:
            raise LinkError(f"Failed to reconcile {declaration}: network ID is 0")
        state = LinkState.from_declaration(declaration, network_id)
        self._sync_style(state)
        return state

    def _apply_network_link(
        self, declaration: LinkDeclaration, previous: LinkState | None
    ) -> int:
        lab = declaration.lab_path
        if previous is not None:
            self._release_if_moved(lab, previous, declaration, "source")
        network_id = declaration.network_id
        self.binder.bind(
            lab, declaration.source_node_id, declaration.source_port, network_id
        )
        return network_id

    def _apply_node_link(
        self,
        declaration: LinkDeclaration,
        previous: LinkState | None,
        reusable_network_id: int | None,
    ) -> int:
        lab = declaration.lab_path
        if previous is not None:
            for end in _ENDS:
                self._release_if_moved(lab, previous, declaration, end)

        source_index, source = self._nodes.get_interface(
            lab, declaration.source_node_id, declaration.source_port
        )
        target_index, target = self._nodes.get_interface(
            lab, declaration.target_node_id, declaration.target_port
        )
        name = implicit_network_name(
            declaration.source_node_id,
            source_index,
            declaration.target_node_id,
            target_index,
        )
        network = self.implicit_networks.create_or_update(
            lab, reusable_network_id, name
        )
        if not network.id:
            raise LinkError(f"Failed to reconcile {declaration}: network ID is 0")

        for node_id, port, interface in (
            (declaration.source_node_id, declaration.source_port, source),
            (declaration.target_node_id, declaration.target_port, target),
        ):
            if interface.network_id == network.id:
                _LOGGER.debug(f"Port {port} of node {node_id} already on {network}")
                continue
            self.binder.bind(lab, node_id, port, network.id)

        self.implicit_networks.hide(lab, network)
        return network.id

    def _release_if_moved(
        self,
        lab: str,
        previous: LinkState,
        declaration: LinkDeclaration,
        end: str,
    ) -> None:
        old_node_id = getattr(previous, f"{end}_node_id")
        old_port = getattr(previous, f"{end}_port")
        if not old_node_id or not old_port:
            return
        new_node_id = getattr(declaration, f"{end}_node_id")
        new_port = getattr(declaration, f"{end}_port")
        if (old_node_id, old_port) == (new_node_id, new_port):
            return
        _LOGGER.info(
            f"{end.capitalize()} moved from port {old_port} of node {old_node_id} "
            f"to port {new_port} of node {new_node_id}"
        )
        self.binder.release(lab, old_node_id, old_port, previous.network_id)

    def _retire_implicit_network(
        self, previous: LinkState, declaration: LinkDeclaration
    ) -> None:
        lab = previous.lab_path
        if previous.network_id == declaration.network_id:
            return
        if previous.target_node_id and previous.target_port:
            self.binder.release(
                lab, previous.target_node_id, previous.target_port, previous.network_id
            )
        try:
            self.implicit_networks.delete(lab, previous.network_id)
        except NetworkNotFound:
            _LOGGER.info(f"Implicit network {previous.network_id} already deleted")

    def _observe_network_link(self, observed: LinkState) -> None:
        lab = observed.lab_path
        node_id = observed.source_node_id
        try:
            self._nodes.get_node(lab, node_id)
        except NodeNotFound as exc:
            observed.source_node_id = 0
            observed.source_port = ""
            raise LinkDriftError(f"source node {node_id} not found", observed) from exc

        port = observed.source_port
        if not port:
            return
        try:
            _, interface = self._nodes.get_interface(lab, node_id, port)
        except InterfaceNotFound as exc:
            observed.source_port = ""
            raise LinkDriftError(
                f"source port {port} not found on node {node_id}", observed
            ) from exc
        if interface.network_id != observed.network_id:
            # shared networks are rewired by others; forget the port, don't fail
            _LOGGER.info(
                f"Source port {port} of node {node_id} was unplugged "
                f"from network {observed.network_id}"
            )
            observed.source_port = ""

    def _observe_node_link(self, observed: LinkState) -> None:
        lab = observed.lab_path
        for end in _ENDS:
            node_id = getattr(observed, f"{end}_node_id")
            try:
                self._nodes.get_node(lab, node_id)
            except NodeNotFound as exc:
                setattr(observed, f"{end}_node_id", 0)
                setattr(observed, f"{end}_port", "")
                message = f"{end} node {node_id} not found"
                raise LinkDriftError(message, observed) from exc

        for end in _ENDS:
            node_id = getattr(observed, f"{end}_node_id")
            port = getattr(observed, f"{end}_port")
            try:
                _, interface = self._nodes.get_interface(lab, node_id, port)
            except InterfaceNotFound as exc:
                setattr(observed, f"{end}_port", "")
                raise LinkDriftError(
                    f"{end} port {port} not found on node {node_id}", observed
                ) from exc
            if interface.network_id != observed.network_id:
                setattr(observed, f"{end}_port", "")
                raise LinkDriftError(
                    f"{end} port {port} is not connected to network "
                    f"{observed.network_id}",
                    observed,
                )

    def _style_supported(self, state: LinkState) -> bool:
        if state.shape is not LinkShape.NODE_TO_NODE:
            return False
        return self._client.is_pro()

    def _sync_style(self, state: LinkState) -> None:
        if state.style is None or not self._style_supported(state):
            return
        self.styles.write(
            state.lab_path, state.target_node_id, state.target_port, state.style
        )
        state.style = self.styles.read(
            state.lab_path, state.target_node_id, state.target_port
        )
