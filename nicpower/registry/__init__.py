# SPDX-License-Identifier: LGPL-3.0-or-later
# nicpower/registry/__init__.py
"""
Windows registry access.

- key: the owning Key wrapper, SystemKey and the well-known roots
- errors: RegError / Result and Win32 status codes
- backend: OS access layer (winreg by default, swappable)
- encoding: value types and DWORD/string encoding
"""

from .backend import RegistryBackend, WinregBackend, current_backend, set_backend, use_backend
from .errors import NO_ERROR, RegError, Result
from .key import INVALID_HANDLE, Key, LocalMachine, ROOTS, SystemKey, root_key

__all__ = [
    "INVALID_HANDLE",
    "Key",
    "LocalMachine",
    "NO_ERROR",
    "ROOTS",
    "RegError",
    "RegistryBackend",
    "Result",
    "SystemKey",
    "WinregBackend",
    "current_backend",
    "root_key",
    "set_backend",
    "use_backend",
]
