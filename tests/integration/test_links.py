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

import pytest

from eveng_client.exceptions import NetworkNotFound
from eveng_client.links import LinkDeclaration
from eveng_client.models import Network

pytestmark = [pytest.mark.integration]


def test_node_link_roundtrip(eve_session, test_lab, link_reconciler, created_links):
    """Connect two nodes, move the target port, then tear the link down."""
    declaration = LinkDeclaration(test_lab, 1, "e0", target_node_id=2, target_port="e0")
    state = link_reconciler.create(declaration)
    created_links.append(state)
    network = eve_session.networks.get_network(test_lab, state.network_id)
    assert network.hidden
    assert link_reconciler.read(state) == state

    declaration.target_port = "e1"
    state = link_reconciler.update(state, declaration)
    created_links.append(state)
    assert link_reconciler.read(state) == state
    _, old_target = eve_session.nodes.get_interface(test_lab, 2, "e0")
    assert not old_target.bound

    link_reconciler.delete(state)
    with pytest.raises(NetworkNotFound):
        eve_session.networks.get_network(test_lab, state.network_id)


def test_network_link(eve_session, test_lab, link_reconciler, created_links):
    cloud = eve_session.networks.create_network(
        test_lab, Network(name="integration-cloud", icon="cloud.png")
    )
    try:
        declaration = LinkDeclaration(test_lab, 1, "e2", network_id=cloud.id)
        state = link_reconciler.create(declaration)
        created_links.append(state)
        assert link_reconciler.read(state) == state

        link_reconciler.delete(state)
        _, interface = eve_session.nodes.get_interface(test_lab, 1, "e2")
        assert not interface.bound
    finally:
        eve_session.networks.delete_network(test_lab, cloud.id)
