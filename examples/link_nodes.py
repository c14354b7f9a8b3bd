#!/usr/bin/env python3
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

import getpass
import json

from eveng_client import EveClient, LinkDeclaration, LinkReconciler, LinkState
from eveng_client.exceptions import LinkDriftError
from eveng_client.models import Style

EVE_HOST = "eve-ng"
EVE_USERNAME = input("username: ")
EVE_PASSWORD = getpass.getpass("password: ")
LAB = "/demo/two-routers.unl"

client = EveClient(EVE_HOST, EVE_USERNAME, EVE_PASSWORD, ssl_verify=False)
links = LinkReconciler(client)

# Connect port e0 of node 1 to port e0 of node 2. EVE-NG draws this as a
# hidden bridge network with both interfaces bound to it.
declaration = LinkDeclaration(
    LAB,
    source_node_id=1,
    source_port="e0",
    target_node_id=2,
    target_port="e0",
    style=Style(style="Dashed", color="#ff8800", label="uplink"),
)
state = links.create(declaration)

# The state is all that is needed to manage the link later on, so keep it.
with open("link-state.json", "w") as fh:
    json.dump(state.as_dict(), fh, indent=4)

# Move the link to port e1 of node 2. The implicit network is kept and
# port e0 of node 2 is released.
declaration.target_port = "e1"
state = links.update(state, declaration)

# Compare the saved state with what the server reports.
with open("link-state.json") as fh:
    saved = LinkState.from_dict(json.load(fh))
try:
    observed = links.read(saved)
except LinkDriftError as exc:
    print(f"Link has drifted: {exc}")
    observed = exc.state
if observed is None:
    print("Link is gone and has to be created again")
else:
    print(json.dumps(observed.as_dict(), indent=4))

links.delete(state)
client.logout()
