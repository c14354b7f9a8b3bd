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

from pathlib import Path

import pytest


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    # integration tests need a live server, skip them unless asked for with -m
    if config.getoption("markexpr"):
        return
    skip_integration = pytest.mark.skip(reason="needs a live EVE-NG server")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture
def test_dir(request: pytest.FixtureRequest) -> Path:
    return request.path.parent
