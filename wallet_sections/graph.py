"""Memoized derivation graph with statically declared inputs.

Each node names its inputs when it is registered, and inputs must already
exist, so the graph is acyclic by construction. A node recomputes only when
one of its input values changed since its last computation: identity for
objects and collections, equality for primitives.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

from .errors import GraphError

logger = logging.getLogger(__name__)

_PRIMITIVES = (str, int, float, bool, bytes, Decimal, Enum, type(None))
_UNSET = object()


def inputs_equal(previous: Any, current: Any) -> bool:
    """Dirty check for one input value."""
    if previous is current:
        return True
    if isinstance(previous, _PRIMITIVES) and isinstance(current, _PRIMITIVES):
        return type(previous) is type(current) and previous == current
    return False


@dataclass
class NodeStats:
    computations: int = 0
    hits: int = 0


@dataclass
class _Node:
    name: str
    inputs: tuple[str, ...]
    func: Callable[..., Any] | None = None
    getter: Callable[[Any], Any] | None = None
    last_args: tuple[Any, ...] | object = _UNSET
    last_value: Any = None
    stats: NodeStats = field(default_factory=NodeStats)

    @property
    def is_source(self) -> bool:
        return self.getter is not None


class DerivationGraph:
    """Directed acyclic graph of named, memoized selectors."""

    def __init__(self) -> None:
        self._nodes: dict[str, _Node] = {}

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._nodes)

    def _register(self, node: _Node) -> None:
        if node.name in self._nodes:
            raise GraphError(f"Node '{node.name}' is already declared")
        for name in node.inputs:
            if name not in self._nodes:
                raise GraphError(
                    f"Node '{node.name}' depends on undeclared node '{name}'"
                )
        self._nodes[node.name] = node

    def source(self, name: str, getter: Callable[[Any], Any] | None = None) -> None:
        """Declare a leaf read from the state (attribute *name* by default)."""
        if getter is None:
            def getter(state: Any, _attr: str = name) -> Any:
                return getattr(state, _attr)
        self._register(_Node(name=name, inputs=(), getter=getter))

    def node(
        self, name: str, inputs: Sequence[str], func: Callable[..., Any]
    ) -> None:
        """Declare a derived node computed as ``func(*input_values)``."""
        self._register(_Node(name=name, inputs=tuple(inputs), func=func))

    def derived(self, name: str, *inputs: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator form of :meth:`node`."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.node(name, inputs, func)
            return func

        return decorator

    def inputs_of(self, name: str) -> tuple[str, ...]:
        return self._get(name).inputs

    def stats(self, name: str) -> NodeStats:
        return self._get(name).stats

    def _get(self, name: str) -> _Node:
        try:
            return self._nodes[name]
        except KeyError:
            raise GraphError(f"Unknown node '{name}'") from None

    def evaluate(self, name: str, state: Any) -> Any:
        """Return the value of *name* for *state*, recomputing only dirty nodes."""
        return self._evaluate(self._get(name), state, {})

    def _evaluate(self, node: _Node, state: Any, pass_cache: dict[str, Any]) -> Any:
        if node.name in pass_cache:
            return pass_cache[node.name]

        if node.is_source:
            value = node.getter(state)
            pass_cache[node.name] = value
            return value

        args = tuple(
            self._evaluate(self._nodes[name], state, pass_cache) for name in node.inputs
        )
        previous = node.last_args
        if previous is not _UNSET and all(
            inputs_equal(p, c) for p, c in zip(previous, args)
        ):
            node.stats.hits += 1
            value = node.last_value
        else:
            logger.debug("Recomputing node %s", node.name)
            value = node.func(*args)
            node.last_args = args
            node.last_value = value
            node.stats.computations += 1

        pass_cache[node.name] = value
        return value


__all__ = ["DerivationGraph", "NodeStats", "inputs_equal"]
