# SPDX-License-Identifier: LGPL-3.0-or-later
# nicpower/core/__init__.py
from .exceptions import Fatal, NicPowerError, RegistryError

__all__ = ["Fatal", "NicPowerError", "RegistryError"]
