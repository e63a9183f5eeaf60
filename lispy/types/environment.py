"""Runtime environment for Lispy.

The Environment maps symbol names to values and supports lexical chaining via
an optional `parent` link. The root of the chain holds the builtins and every
global definition; closures own a standalone Environment which the calling
convention duplicates and links to the caller for each invocation.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from lispy.types.error_value import unbound_symbol
from lispy.types.value import Value


class Environment:
    """Hierarchical mapping from symbol names to Lispy values."""

    __slots__ = ("vars", "parent")

    def __init__(self, parent: Optional[Environment] = None):
        self.vars: dict[str, Value] = {}
        self.parent: Environment | None = parent

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.parent
        return None

    def lookup(self, name: str) -> Value:
        """Return the value bound to `name`, or an unbound-symbol Error value."""
        env = self.find(name)
        if env is None:
            return unbound_symbol(name)
        return env.vars[name]

    def root(self) -> Environment:
        env = self
        while env.parent is not None:
            env = env.parent
        return env

    def bind_local(self, name: str, value: Value) -> None:
        """Insert or overwrite `name` in this frame only."""
        # Values are immutable, storing the reference is a deep copy in effect
        self.vars[name] = value

    def bind_global(self, name: str, value: Value) -> None:
        """Insert or overwrite `name` in the root frame of the chain."""
        self.root().bind_local(name, value)

    def update(self, mapping: dict[str, Value]) -> None:
        """Bulk-bind a mapping of name -> value in the current frame."""
        for k, v in mapping.items():
            self.bind_local(k, v)

    def copy(self) -> Environment:
        """Duplicate this frame: same parent link, independent bindings."""
        dup = Environment(self.parent)
        dup.vars = dict(self.vars)
        return dup

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.parent is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        chain = []
        env: Optional[Environment] = self
        while env is not None:
            with StringIO() as env_buf:
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
            env = env.parent
        return f"<Environment chain: {' -> '.join(chain)}>"
