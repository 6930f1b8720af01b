"""Detection and tracking of iteration calls such as ``items.map((item, i) => ...)``."""

from dataclasses import dataclass, field
from typing import Collection

from auto_testid.core.nodes import CallExpression, FunctionExpression, MemberExpression


@dataclass(frozen=True)
class LoopContext:
    """An iteration call whose callback subtree is being visited.

    Attributes:
        method: The iteration method name, e.g. "map"
        index_variable: Name of the callback's second parameter, or None when the
                        callback has no plain-identifier index parameter
        call: The call expression that opened this context
    """

    method: str
    index_variable: str | None
    call: CallExpression = field(compare=False, repr=False)


def extract_loop_context(
    node: CallExpression, iteration_methods: Collection[str]
) -> LoopContext | None:
    """Recognise an iteration call.

    A call is an iteration call when its callee is a property access whose
    property name is one of ``iteration_methods`` and its first argument is an
    inline function. The callback's second parameter, when it is a plain
    identifier, names the per-item index.

    Args:
        node: The call expression to inspect
        iteration_methods: Property names that denote iteration

    Returns:
        The loop context, or None if the call does not match
    """
    callee = node.callee
    if not isinstance(callee, MemberExpression) or callee.property is None:
        return None
    if callee.property not in iteration_methods:
        return None
    if not node.arguments:
        return None

    callback = node.arguments[0]
    if not isinstance(callback, FunctionExpression):
        return None

    index_variable = None
    if len(callback.params) >= 2:
        index_variable = callback.params[1].name
    return LoopContext(callee.property, index_variable, node)


class LoopContextTracker:
    """Stack of the iteration calls enclosing the current node.

    One context is pushed per iteration call on entry and popped when that same
    call is left, so leaving an inner call always restores the enclosing call's
    index variable.
    """

    def __init__(self) -> None:
        self._contexts: list[LoopContext] = []

    @property
    def in_loop(self) -> bool:
        """True while inside at least one iteration call."""
        return bool(self._contexts)

    @property
    def index_variable(self) -> str | None:
        """Index variable of the innermost iteration call, if it has one."""
        if not self._contexts:
            return None
        return self._contexts[-1].index_variable

    @property
    def depth(self) -> int:
        return len(self._contexts)

    def push(self, context: LoopContext) -> None:
        self._contexts.append(context)

    def pop_for(self, node: CallExpression) -> LoopContext | None:
        """Pop the context opened by ``node``, if ``node`` opened one.

        Args:
            node: The call expression being left

        Returns:
            The popped context, or None if ``node`` is not the innermost
            iteration call
        """
        if self._contexts and self._contexts[-1].call is node:
            return self._contexts.pop()
        return None
