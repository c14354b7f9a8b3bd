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

from eveng_client.exceptions import APIError, NetworkNotFound
from eveng_client.links import ImplicitNetworkManager, implicit_network_name
from eveng_client.models.network import HIDDEN, VISIBLE


@pytest.fixture
def manager(fake_client):
    return ImplicitNetworkManager(fake_client.networks)


def test_name():
    assert implicit_network_name(1, 0, 2, 3) == "1_0_2_3"


@pytest.mark.parametrize("existing", [None, 0])
def test_create(manager, fake_client, lab_path, existing):
    network = manager.create_or_update(lab_path, existing, "1_0_2_0")
    assert network.id == 1
    stored = fake_client.lab.networks[1]
    assert stored.name == "1_0_2_0"
    assert stored.type == "bridge"
    assert stored.icon == "lan.png"
    assert stored.visibility == VISIBLE
    assert (stored.left, stored.top) == (0, 0)


def test_update_keeps_id_and_bindings(manager, fake_client, lab_path):
    network = manager.create_or_update(lab_path, None, "1_0_2_0")
    fake_client.lab.interface(1, "e0").network_id = network.id
    fake_client.lab.mutations()

    renamed = manager.create_or_update(lab_path, network.id, "1_0_2_1")
    assert renamed.id == network.id
    assert fake_client.lab.networks[network.id].name == "1_0_2_1"
    assert fake_client.lab.interface(1, "e0").network_id == network.id
    assert fake_client.lab.mutations() == [
        ("update_network", network.id, "1_0_2_1", VISIBLE)
    ]


def test_gone_network_is_recreated(manager, fake_client, lab_path):
    fake_client.lab.last_network_id = 41
    network = manager.create_or_update(lab_path, 12, "1_0_2_0")
    assert network.id == 42
    assert fake_client.lab.mutations() == [("create_network", 42, "1_0_2_0")]


def test_lookup_errors_are_not_swallowed(manager, fake_client, lab_path, api_error):
    existing = manager.create_or_update(lab_path, None, "1_0_2_0")
    fake_client.lab.failures["get_network"] = api_error(503)
    with pytest.raises(APIError):
        manager.create_or_update(lab_path, existing.id, "1_0_2_0")
    assert len(fake_client.lab.networks) == 1


def test_hide(manager, fake_client, lab_path):
    network = manager.create_or_update(lab_path, None, "1_0_2_0")
    manager.hide(lab_path, network)
    assert network.hidden
    assert fake_client.lab.networks[network.id].visibility == HIDDEN


def test_delete(manager, fake_client, lab_path):
    network = manager.create_or_update(lab_path, None, "1_0_2_0")
    manager.delete(lab_path, network.id)
    assert network.id not in fake_client.lab.networks
    with pytest.raises(NetworkNotFound):
        manager.delete(lab_path, network.id)


def test_rename_keeps_network_hidden(manager, fake_client, lab_path):
    network = manager.create_or_update(lab_path, None, "1_0_2_0")
    manager.hide(lab_path, network)
    fake_client.lab.mutations()

    renamed = manager.create_or_update(lab_path, network.id, "1_0_2_1")
    assert renamed.hidden
    assert fake_client.lab.mutations() == [
        ("update_network", network.id, "1_0_2_1", HIDDEN)
    ]

    manager.hide(lab_path, renamed)
    assert fake_client.lab.mutations() == []
