#
# The EVE-NG Client Library
# Python bindings and link reconciliation for the EVE-NG emulation platform
#
# This file is part of eveng-client
# Copyright (c) 2024-2025, the eveng-client authors.
# All rights reserved.
#

# flake8: noqa: F401

from .eveng_client import ClientConfig, EveClient
from .exceptions import (
    InitializationError,
    InterfaceNotFound,
    LinkConfigurationError,
    LinkDriftError,
    LinkError,
    NetworkNotFound,
    NodeNotFound,
    SelfLinkError,
)
from .links import LinkDeclaration, LinkReconciler, LinkShape, LinkState
