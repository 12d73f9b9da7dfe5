# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

import re

from nicpower.registry import SystemKey
from nicpower.registry.encoding import REG_EXPAND_SZ

ERROR_FILE_NOT_FOUND = 2
ERROR_INVALID_HANDLE = 6
ERROR_NO_MORE_ITEMS = 259

_TEXT = {
    ERROR_FILE_NOT_FOUND: "The system cannot find the file specified",
    ERROR_INVALID_HANDLE: "The handle is invalid",
    ERROR_NO_MORE_ITEMS: "No more data is available",
}


def _oserror(code, text=None):
    return OSError(code, text or _TEXT.get(code, "Injected failure"))


class FakeNode:
    def __init__(self, name):
        self.name = name
        self.children = {}    # lower name -> FakeNode, insertion ordered
        self.values = {}      # value name -> (data, reg type)

    def child(self, name):
        return self.children.get(name.lower())

    def ensure_child(self, name):
        node = self.child(name)
        if node is None:
            node = self.children[name.lower()] = FakeNode(name)
        return node


class FakeRegistry:
    '''
    In-memory winreg-like backend for unit tests.

    - predefined roots are addressed by their HKEY values
    - open handles are small ints; closes are recorded in `closed`
    - fail_on(op, code, name=None) makes every matching call raise OSError
    - REG_EXPAND_SZ values are expanded from `env` on read, like winreg
    '''

    def __init__(self):
        self.roots = {sk.hkey: FakeNode(sk.canonical_name) for sk in SystemKey}
        self.handles = {}     # handle -> FakeNode
        self.closed = []      # handles in close order
        self.opened = []      # (parent handle, subkey) in open order
        self.failures = {}    # (op, name or None) -> code
        self._next = 1000
        self.env = {"SystemRoot": "C:\\Windows"}

    # -- test helpers -------------------------------------------------

    def _walk(self, path, create=False):
        root_name, _, rest = path.partition("\\")
        node = self.roots[SystemKey.from_name(root_name).hkey]
        for part in filter(None, rest.split("\\")):
            nxt = node.ensure_child(part) if create else node.child(part)
            if nxt is None:
                return None
            node = nxt
        return node

    def add_key(self, path, values=None):
        node = self._walk(path, create=True)
        for name, (data, reg_type) in (values or {}).items():
            node.values[name] = (data, reg_type)
        return node

    def get_value(self, path, name):
        node = self._walk(path)
        return None if node is None else node.values.get(name)

    def fail_on(self, op, code, name=None):
        self.failures[(op, name)] = code

    @property
    def live_handles(self):
        return sorted(self.handles)

    # -- backend protocol ---------------------------------------------

    def _check(self, op, name=None):
        for key in ((op, name), (op, None)):
            if key in self.failures:
                raise _oserror(self.failures[key])

    def _node(self, handle):
        if handle in self.roots:
            return self.roots[handle]
        if handle in self.handles:
            return self.handles[handle]
        raise _oserror(ERROR_INVALID_HANDLE)

    def open_key(self, handle, subkey):
        self._check("open_key", subkey)
        node = self._node(handle)
        for part in filter(None, subkey.split("\\")):
            node = node.child(part)
            if node is None:
                raise _oserror(ERROR_FILE_NOT_FOUND)
        self._next += 1
        self.handles[self._next] = node
        self.opened.append((handle, subkey))
        return self._next

    def close_key(self, handle):
        self._check("close_key")
        if handle not in self.handles:
            raise _oserror(ERROR_INVALID_HANDLE)
        del self.handles[handle]
        self.closed.append(handle)

    def query_subkey_count(self, handle):
        self._check("query_subkey_count")
        return len(self._node(handle).children)

    def enum_key(self, handle, index):
        self._check("enum_key", index)
        children = list(self._node(handle).children.values())
        if index >= len(children):
            raise _oserror(ERROR_NO_MORE_ITEMS)
        return children[index].name

    def query_value(self, handle, name):
        self._check("query_value", name)
        node = self._node(handle)
        if name not in node.values:
            raise _oserror(ERROR_FILE_NOT_FOUND)
        data, reg_type = node.values[name]
        if reg_type == REG_EXPAND_SZ and isinstance(data, str):
            data = re.sub(r"%([^%]+)%", lambda m: self.env.get(m.group(1), m.group(0)), data)
        return data, reg_type

    def set_value(self, handle, subkey, name, reg_type, data):
        self._check("set_value", name)
        node = self._node(handle)
        for part in filter(None, subkey.split("\\")):
            node = node.ensure_child(part)
        node.values[name] = (data, reg_type)
