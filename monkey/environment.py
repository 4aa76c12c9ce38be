from typing import Any, Dict, Optional


class Environment:
    """A scope mapping identifiers to runtime values.

    Scopes form a chain through `outer`. Lookups walk the chain from the
    innermost scope outwards; bindings are only ever written to the scope
    they are made in, so an inner `let` shadows an outer name instead of
    overwriting it. Outer scopes are shared by reference: every closure
    created in a scope keeps that scope alive and sees later bindings in it.
    """
    def __init__(self, outer: Optional['Environment'] = None):
        self.outer = outer
        self.values: Dict[str, Any] = {}

    def get(self, name: str) -> Optional[Any]:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.outer
        return None

    def set(self, name: str, value: Any) -> Any:
        self.values[name] = value
        return value

    def enclosed(self) -> 'Environment':
        """Create a new scope whose outer link is this one."""
        return Environment(outer=self)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __repr__(self) -> str:
        return f"<Environment {sorted(self.values)} outer={self.outer is not None}>"
