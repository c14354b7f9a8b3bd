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

"""
Integration tests require access to a live EVE-NG instance, configured
through EVE_HOST, EVE_USER and EVE_PASSWORD, and a lab named by EVE_TEST_LAB
that holds two stopped nodes with IDs 1 and 2.
"""

import os
from typing import Iterator

import pytest

from eveng_client import EveClient, LinkReconciler
from eveng_client.exceptions import ElementNotFound


@pytest.fixture(scope="session")
def eve_session() -> Iterator[EveClient]:
    client = EveClient(ssl_verify=False)
    yield client
    client.logout()


@pytest.fixture(scope="session")
def test_lab() -> str:
    lab = os.getenv("EVE_TEST_LAB")
    if not lab:
        pytest.skip("EVE_TEST_LAB is not set")
    return lab


@pytest.fixture
def link_reconciler(eve_session: EveClient) -> LinkReconciler:
    return LinkReconciler(eve_session)


@pytest.fixture
def created_links(link_reconciler: LinkReconciler) -> Iterator[list]:
    """
    Collect the states of links a test creates. They are deleted after the
    test, even if it fails halfway.
    """
    states = []
    yield states
    for state in reversed(states):
        try:
            link_reconciler.delete(state)
        except ElementNotFound:
            pass
