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

from dataclasses import replace

import httpx
import pytest
import respx

from eveng_client.eveng_client import EveClient
from eveng_client.exceptions import (
    APIError,
    InterfaceNotFound,
    NetworkNotFound,
    NodeNotFound,
)
from eveng_client.links import LinkReconciler
from eveng_client.models import Interface, Network, Node

FAKE_HOST = "https://0.0.0.0"
FAKE_HOST_API = f"{FAKE_HOST}/api/"
LAB = "/tests/reconcile.unl"


def _api_error(status_code: int = 500, message: str = "boom") -> APIError:
    request = httpx.Request("PUT", FAKE_HOST_API)
    response = httpx.Response(status_code, json={"message": message}, request=request)
    return APIError(message, request=request, response=response)


class FakeLab:
    """
    In-memory state of one EVE-NG lab, shared by the fake managers below.
    Every mutating call is appended to `calls`; an exception put in
    `failures` under an operation name is raised by the next such call.
    """

    def __init__(self) -> None:
        self.interfaces: dict[int, list[Interface]] = {}
        self.networks: dict[int, Network] = {}
        self.topology: list[dict] = []
        self.calls: list[tuple] = []
        self.failures: dict[str, Exception] = {}
        self.last_network_id = 0

    def check(self, operation: str) -> None:
        error = self.failures.pop(operation, None)
        if error is not None:
            raise error

    def add_node(self, node_id: int, ports=("e0", "e1", "e2")) -> None:
        self.interfaces[node_id] = [
            Interface(index=index, name=port) for index, port in enumerate(ports)
        ]

    def add_network(self, name: str = "cloud") -> int:
        self.last_network_id += 1
        self.networks[self.last_network_id] = Network(
            id=self.last_network_id, name=name, icon="cloud.png"
        )
        return self.last_network_id

    def interface(self, node_id: int, port: str) -> Interface:
        for interface in self.interfaces.get(node_id, ()):
            if interface.name == port:
                return interface
        raise InterfaceNotFound(f"{port} on node {node_id}")

    def mutations(self) -> list[tuple]:
        """Return the calls recorded so far and start a new record."""
        calls, self.calls = self.calls, []
        return calls


class FakeNodes:
    def __init__(self, lab: FakeLab) -> None:
        self._lab = lab

    def get_node(self, lab, node_id):
        self._lab.check("get_node")
        if node_id not in self._lab.interfaces:
            raise NodeNotFound(node_id)
        return Node(id=node_id, name=f"node{node_id}")

    def get_interface(self, lab, node_id, port):
        self._lab.check("get_interface")
        if node_id not in self._lab.interfaces:
            raise NodeNotFound(node_id)
        interface = self._lab.interface(node_id, port)
        return interface.index, replace(interface)

    def update_interface_binding(self, lab, node_id, port, network_id):
        self._lab.check("update_interface_binding")
        if network_id and network_id not in self._lab.networks:
            raise _api_error(400, f"Network {network_id} does not exist")
        self._lab.interface(node_id, port).network_id = network_id
        self._lab.calls.append(("bind", node_id, port, network_id))

    def update_interface_style(self, lab, node_id, port, style):
        self._lab.check("update_interface_style")
        source = f"node{node_id}"
        entry = {"source": source, "source_label": port}
        entry.update({key: str(value) for key, value in style.as_payload().items()})
        self._lab.topology = [
            item
            for item in self._lab.topology
            if (item.get("source"), item.get("source_label")) != (source, port)
        ]
        self._lab.topology.append(entry)
        self._lab.calls.append(("style", node_id, port))


class FakeNetworks:
    def __init__(self, lab: FakeLab) -> None:
        self._lab = lab

    def get_network(self, lab, network_id):
        self._lab.check("get_network")
        if network_id not in self._lab.networks:
            raise NetworkNotFound(network_id)
        return replace(self._lab.networks[network_id])

    def create_network(self, lab, network):
        self._lab.check("create_network")
        self._lab.last_network_id += 1
        network.id = self._lab.last_network_id
        self._lab.networks[network.id] = replace(network)
        self._lab.calls.append(("create_network", network.id, network.name))
        return network

    def update_network(self, lab, network):
        self._lab.check("update_network")
        if network.id not in self._lab.networks:
            raise NetworkNotFound(network.id)
        self._lab.networks[network.id] = replace(network)
        self._lab.calls.append(
            ("update_network", network.id, network.name, network.visibility)
        )

    def delete_network(self, lab, network_id):
        self._lab.check("delete_network")
        if network_id not in self._lab.networks:
            raise NetworkNotFound(network_id)
        del self._lab.networks[network_id]
        # the server unbinds whatever was attached to a deleted network
        for interfaces in self._lab.interfaces.values():
            for interface in interfaces:
                if interface.network_id == network_id:
                    interface.network_id = 0
        self._lab.calls.append(("delete_network", network_id))


class FakeLabs:
    def __init__(self, lab: FakeLab) -> None:
        self._lab = lab

    def get_topology(self, lab):
        self._lab.check("get_topology")
        return [dict(entry) for entry in self._lab.topology]


class FakeEveClient:
    """Offers the parts of EveClient the link engine uses, backed by a FakeLab."""

    def __init__(self, pro: bool = False) -> None:
        self.pro = pro
        self.lab = FakeLab()
        self.nodes = FakeNodes(self.lab)
        self.networks = FakeNetworks(self.lab)
        self.labs = FakeLabs(self.lab)

    def is_pro(self) -> bool:
        return self.pro


@pytest.fixture
def fake_client() -> FakeEveClient:
    client = FakeEveClient()
    for node_id in (1, 2, 3):
        client.lab.add_node(node_id)
    return client


@pytest.fixture
def fake_pro_client(fake_client: FakeEveClient) -> FakeEveClient:
    fake_client.pro = True
    return fake_client


@pytest.fixture
def reconciler(fake_client: FakeEveClient) -> LinkReconciler:
    return LinkReconciler(fake_client)


@pytest.fixture
def respx_mock_with_login(respx_mock: respx.MockRouter) -> respx.MockRouter:
    respx_mock.post(FAKE_HOST_API + "auth/login", name="login").respond(
        200,
        json={"code": 200, "status": "success", "message": "User logged in"},
        headers={"set-cookie": "unetlab_session=0a1b2c3d; Path=/"},
    )
    respx_mock.get(FAKE_HOST_API + "status", name="status").respond(
        200,
        json={
            "code": 200,
            "status": "success",
            "data": {"version": "6.2.0-4-PRO", "qemu_version": "8.2.1"},
        },
    )
    return respx_mock


@pytest.fixture
def eve_client(respx_mock_with_login: respx.MockRouter) -> EveClient:
    return EveClient(FAKE_HOST, "admin", "eve")


@pytest.fixture
def api_error():
    """Return a factory of APIError instances for failure injection."""
    return _api_error


@pytest.fixture
def lab_path() -> str:
    return LAB
