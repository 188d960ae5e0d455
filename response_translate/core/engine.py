"""Translation engine.

Walks an arbitrary (possibly cyclic) object graph, finds fields carrying a
TranslateField descriptor, resolves them through the ResolverRegistry and
writes display values into their target fields.

Rules that hold for every traversal:

* the raw field is never modified; only the descriptor's target is written,
* a target that already holds a value is never overwritten,
* each ``(object, field)`` pair is translated at most once,
* every object is entered at most once (cycle guard),
* within a collection, values sharing ``(resolver, descriptor, target)`` are
  resolved with a single ``batch_resolve`` call,
* resolver failures degrade to the fallback literal or the raw value and
  never propagate,
* nesting depth is not limited by the interpreter recursion limit.
"""

from __future__ import annotations

import logging
import types
from collections.abc import Callable, Iterable, Iterator, Mapping, MutableSequence, Sequence
from collections.abc import Set as AbstractSet
from datetime import date, time, timedelta, tzinfo
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import PurePath
from typing import Any, NamedTuple
from uuid import UUID

from response_translate.core.context import TranslationContext
from response_translate.core.descriptor import TranslateField
from response_translate.core.introspection import (
    FieldPlan,
    get_field_plan,
    has_field,
    instance_field_names,
)
from response_translate.core.page import Page
from response_translate.core.registry import ResolverRegistry
from response_translate.resolvers.base import Resolver, is_absent, unique_present

logger = logging.getLogger(__name__)

_SIMPLE_TYPES: tuple[type, ...] = (
    str,
    bytes,
    bytearray,
    memoryview,
    bool,
    int,
    float,
    complex,
    Decimal,
    Fraction,
    date,
    time,
    timedelta,
    tzinfo,
    UUID,
    Enum,
    PurePath,
    range,
    type,
    types.ModuleType,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
)

_EMPTY_PLAN = FieldPlan(field_names=(), translatable=())


def is_simple_value(value: Any) -> bool:
    """Terminal values: never traversed, never carry translatable fields."""
    return value is None or isinstance(value, _SIMPLE_TYPES)


def _is_collection(value: Any) -> bool:
    """Sequences and sets whose elements are translated as one batch."""
    return isinstance(value, (tuple, MutableSequence, AbstractSet))


class _TraversalState:
    """Bookkeeping for one ``translate`` call. Never shared between calls.

    Objects are tracked by identity; references are held so an ``id`` cannot
    be reused while the traversal runs.
    """

    __slots__ = ("_visited", "_translated", "written")

    def __init__(self) -> None:
        self._visited: dict[int, Any] = {}
        self._translated: dict[int, tuple[Any, set[str]]] = {}
        self.written = 0

    def is_visited(self, obj: Any) -> bool:
        return id(obj) in self._visited

    def mark_visited(self, obj: Any) -> None:
        self._visited[id(obj)] = obj

    def is_translated(self, obj: Any, field_name: str) -> bool:
        entry = self._translated.get(id(obj))
        return entry is not None and field_name in entry[1]

    def mark_translated(self, obj: Any, field_name: str) -> None:
        entry = self._translated.get(id(obj))
        if entry is None:
            entry = (obj, set())
            self._translated[id(obj)] = entry
        entry[1].add(field_name)

    @property
    def visited_count(self) -> int:
        return len(self._visited)


class _BatchKey(NamedTuple):
    resolver: Resolver
    descriptor: TranslateField
    target: str


class _Task(NamedTuple):
    owner: Any
    field_name: str
    raw_value: Any


class TranslationEngine:
    """Fills display fields across a response object graph.

    Args:
        registry: Strategy -> resolver lookup.
        page_types: Types treated as paginated wrappers.
        page_attribute: Attribute of a page holding its element collection.
    """

    def __init__(
        self,
        registry: ResolverRegistry,
        *,
        page_types: tuple[type, ...] = (Page,),
        page_attribute: str = "items",
    ) -> None:
        self._registry = registry
        self._page_types = page_types
        self._page_attribute = page_attribute

    @property
    def registry(self) -> ResolverRegistry:
        return self._registry

    def translate(self, root: Any, context: TranslationContext | None = None) -> Any:
        """Translate *root* in place and return it.

        Args:
            root: Any value: a structured object, a container, a page, ...
            context: Switches for this call. Defaults to the current
                execution unit's context.

        Returns:
            *root* itself. When translation is disabled it is returned untouched.
        """
        if root is None:
            return None
        if context is None:
            context = TranslationContext.current()
        if not context.is_enabled():
            return root

        state = _TraversalState()
        self._walk(root, context, state)
        logger.debug(
            "Translated %d field(s) across %d object(s)",
            state.written,
            state.visited_count,
        )
        return root

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _walk(self, root: Any, context: TranslationContext, state: _TraversalState) -> None:
        """Depth-first, pre-order walk with an explicit stack.

        Nesting depth is bounded by memory, not by the interpreter's
        recursion limit.
        """
        stack: list[Any] = [root]
        while stack:
            children = self._visit(stack.pop(), context, state)
            if children:
                stack.extend(reversed(children))

    def _visit(
        self, value: Any, context: TranslationContext, state: _TraversalState
    ) -> list[Any]:
        """Translate what *value* holds directly and return the values to descend into."""
        if is_simple_value(value):
            return []
        if state.is_visited(value):
            return []
        state.mark_visited(value)

        if isinstance(value, Mapping):
            # Keys are never touched; mutating them would corrupt lookups.
            return self._elements(value, lambda mapping: mapping.values())

        if _is_collection(value):
            elements = self._elements(value, list)
            if elements:
                # Resolve the whole collection first so each strategy is hit
                # once, then descend for nested structures.
                self._batch_translate(elements, context, state)
            return elements

        if isinstance(value, Sequence):
            return self._elements(value, list)

        content = self._page_content(value)
        if content is not None:
            return [content]

        if isinstance(value, Iterator):
            # Consuming an iterator would empty it for the serializer.
            return []

        return self._process_object(value, context, state)

    @staticmethod
    def _elements(container: Any, read: Callable[[Any], Iterable[Any]]) -> list[Any]:
        try:
            return list(read(container))
        except Exception:
            logger.debug(
                "Skipping %s that failed during iteration",
                type(container).__name__,
                exc_info=True,
            )
            return []

    def _page_content(self, value: Any) -> Any | None:
        """Return the element collection of a page, or None if *value* is not one."""
        if not self._page_types or not isinstance(value, self._page_types):
            return None
        content = self._read(value, self._page_attribute)
        return content if _is_collection(content) else None

    def _process_object(
        self, obj: Any, context: TranslationContext, state: _TraversalState
    ) -> list[Any]:
        plan = self._plan_for(obj)
        descriptors = dict(plan.translatable)
        nested: list[Any] = []

        for name in instance_field_names(obj, plan):
            descriptor = descriptors.get(name)
            if descriptor is None:
                nested.append(self._read(obj, name))
                continue

            prepared = self._prepare(obj, plan, name, descriptor, context, state)
            if prepared is None:
                continue
            resolver, raw_value = prepared
            translated = self._safe_resolve(resolver, raw_value, descriptor, context)
            self._write_back(obj, name, descriptor, raw_value, translated, state)
        return nested

    # ------------------------------------------------------------------
    # Batch translation
    # ------------------------------------------------------------------

    def _batch_translate(
        self, elements: list[Any], context: TranslationContext, state: _TraversalState
    ) -> None:
        groups: dict[_BatchKey, list[_Task]] = {}

        for element in elements:
            if is_simple_value(element) or isinstance(element, (Mapping, Sequence, AbstractSet)):
                continue
            plan = self._plan_for(element)
            for name, descriptor in plan.translatable:
                prepared = self._prepare(element, plan, name, descriptor, context, state)
                if prepared is None:
                    continue
                resolver, raw_value = prepared
                key = _BatchKey(resolver, descriptor, descriptor.target)
                groups.setdefault(key, []).append(_Task(element, name, raw_value))

        for key, tasks in groups.items():
            raw_values = set(unique_present([task.raw_value for task in tasks]))
            resolved = self._safe_batch_resolve(key.resolver, raw_values, key.descriptor, context)
            for task in tasks:
                self._write_back(
                    task.owner,
                    task.field_name,
                    key.descriptor,
                    task.raw_value,
                    resolved.get(task.raw_value),
                    state,
                )

    def _prepare(
        self,
        owner: Any,
        plan: FieldPlan,
        field_name: str,
        descriptor: TranslateField,
        context: TranslationContext,
        state: _TraversalState,
    ) -> tuple[Resolver, Any] | None:
        """Apply the skip rules; return ``(resolver, raw_value)`` if the field should resolve."""
        if not context.is_strategy_enabled(descriptor.strategy):
            return None
        if state.is_translated(owner, field_name):
            return None

        target = descriptor.target
        if not target:
            logger.debug(
                "%s.%s: descriptor has no target field; skipped",
                type(owner).__name__,
                field_name,
            )
            return None
        if not has_field(owner, plan, target):
            logger.debug(
                "%s.%s: target field %r does not exist; skipped",
                type(owner).__name__,
                field_name,
                target,
            )
            return None

        raw_value = self._read(owner, field_name)
        if is_absent(raw_value):
            return None
        try:
            hash(raw_value)
        except TypeError:
            logger.debug(
                "%s.%s: unhashable raw value of type %s; skipped",
                type(owner).__name__,
                field_name,
                type(raw_value).__name__,
            )
            return None

        resolver = self._registry.get(descriptor.strategy)
        if resolver is None:
            logger.debug(
                "%s.%s: no resolver registered for strategy %r; skipped",
                type(owner).__name__,
                field_name,
                descriptor.strategy.value,
            )
            return None
        return resolver, raw_value

    # ------------------------------------------------------------------
    # Resolver calls and write-back
    # ------------------------------------------------------------------

    def _safe_batch_resolve(
        self,
        resolver: Resolver,
        raw_values: set[Any],
        descriptor: TranslateField,
        context: TranslationContext,
    ) -> Mapping[Any, Any]:
        try:
            result = resolver.batch_resolve(raw_values, descriptor, context)
        except Exception:
            logger.warning(
                "Resolver %r failed on a batch of %d value(s); using fallbacks",
                resolver,
                len(raw_values),
                exc_info=True,
            )
            return {}
        return result if isinstance(result, Mapping) else {}

    def _safe_resolve(
        self,
        resolver: Resolver,
        raw_value: Any,
        descriptor: TranslateField,
        context: TranslationContext,
    ) -> Any | None:
        try:
            return resolver.resolve(raw_value, descriptor, context)
        except Exception:
            logger.warning(
                "Resolver %r failed on %r; using fallback", resolver, raw_value, exc_info=True
            )
            return None

    def _write_back(
        self,
        owner: Any,
        field_name: str,
        descriptor: TranslateField,
        raw_value: Any,
        translated: Any,
        state: _TraversalState,
    ) -> None:
        value = translated
        if value is None:
            value = descriptor.fallback or raw_value

        # A target that already holds a value was set by business code or an
        # earlier pass; it is left alone but the field still counts as done.
        if self._read(owner, descriptor.target) is None:
            try:
                setattr(owner, descriptor.target, value)
                state.written += 1
            except Exception:
                logger.debug(
                    "%s.%s: could not write target %r",
                    type(owner).__name__,
                    field_name,
                    descriptor.target,
                    exc_info=True,
                )
        state.mark_translated(owner, field_name)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _plan_for(obj: Any) -> FieldPlan:
        try:
            return get_field_plan(type(obj))
        except Exception:
            logger.debug("Field discovery failed for %s", type(obj).__name__, exc_info=True)
            return _EMPTY_PLAN

    @staticmethod
    def _read(obj: Any, name: str) -> Any:
        try:
            return getattr(obj, name, None)
        except Exception:
            return None
