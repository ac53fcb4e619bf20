"""Runtime scope chain.

`Environment` holds the variable bindings of one scope plus an optional link
to the enclosing scope. Blocks and function calls each get a fresh child
scope; lookups and assignments walk outwards through the `enclosing` links
until they find the name, which gives lexical shadowing. A function value
keeps a reference to the scope it was defined in, so a scope can outlive the
block that created it.
"""

from __future__ import annotations
from typing import Any, Dict, Optional
from errors import DuplicateDefinitionError, UndefinedVariableError


class Environment:
    def __init__(self, enclosing: Optional[Environment] = None):
        self.values: Dict[str, Any] = {}
        self.enclosing = enclosing

    def define(self, name: str, value: Any) -> None:
        """Declare a new variable in the current scope."""
        if name in self.values:
            raise DuplicateDefinitionError(name)
        self.values[name] = value

    def get(self, name: str) -> Any:
        """Look up a variable in the current and enclosing scopes."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.enclosing
        raise UndefinedVariableError(name)

    def assign(self, name: str, value: Any) -> Any:
        """Rebind the nearest existing variable called `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                env.values[name] = value
                return value
            env = env.enclosing
        raise UndefinedVariableError(name)

    def __repr__(self) -> str:
        return f"Environment({sorted(self.values)})"
