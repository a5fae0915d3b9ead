"""Copy engine: the public copy operations and their wiring.

Usage:
    engine = CopyEngine()
    clone = engine.copy(foo)                 # independent deep copy
    bar = engine.copy_to(foo, Bar)           # new Bar from matching attributes
    engine.copy_into(foo, existing_bar)      # overwrite matching attributes
    bars = engine.copy_all(foos, Bar)
    bar_set = engine.copy_all_with(foos, set, Bar)

    with CopyEngine(settings=CopySettings(parallel=False)) as engine:
        ...
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Collection, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, TypeVar

from objectfactory.adapters import Codec, ProxySubsystem, PydanticCodec, default_proxy_subsystem
from objectfactory.cloning import ContainerCloner, CopyOrchestrator, LeafCloner, ProxyHandler
from objectfactory.config import CopySettings
from objectfactory.core.schema import Attribute, SchemaRegistry, get_registry
from objectfactory.core.types import Copy, container_kind, is_simple_type
from objectfactory.engine.validation import (
    verify_collection,
    verify_collection_and_factory,
    verify_source,
    verify_source_and_destination,
)
from objectfactory.errors import ConversionError, CopyError
from objectfactory.observability import log_debug, log_info, type_name
from objectfactory.resolution import FieldResolver, MatchedPair, ResolutionCache, new_instance

T = TypeVar("T")
R = TypeVar("R")


class CopyEngine:
    """Copies object graphs between compatible types.

    Attributes are matched by normalized name or alias, filtered through the
    declared exclusions, and cloned so that no mutable state is shared with
    the source. Per-type resolution work is cached for the engine's lifetime.

    Args:
        settings: Parallelism settings. Read from the environment if omitted.
        cache: Resolution cache, a fresh one if omitted.
        codec: Structural codec, PydanticCodec if omitted.
        proxies: Proxy subsystem, picked from installed libraries if omitted.
        registry: Schema registry, the global one if omitted.
    """

    def __init__(
        self,
        *,
        settings: CopySettings | None = None,
        cache: ResolutionCache | None = None,
        codec: Codec | None = None,
        proxies: ProxySubsystem | None = None,
        registry: SchemaRegistry | None = None,
    ) -> None:
        self._settings = settings or CopySettings()
        self._cache = cache if cache is not None else ResolutionCache()
        self._fields = FieldResolver(self._cache, registry or get_registry())
        codec = codec or PydanticCodec()
        leaf = LeafCloner(codec, convert=self.copy_to)
        self._containers = ContainerCloner(codec, leaf)
        self._orchestrator = CopyOrchestrator(
            ProxyHandler(proxies or default_proxy_subsystem()), leaf, self._containers
        )
        self._executor: ThreadPoolExecutor | None = None
        self._executor_lock = threading.Lock()
        self._worker = threading.local()

    @property
    def settings(self) -> CopySettings:
        return self._settings

    @property
    def cache(self) -> ResolutionCache:
        return self._cache

    @property
    def fields(self) -> FieldResolver:
        return self._fields

    def copy(self, source: T) -> Copy[T]:
        """Deep copy ``source`` into a new instance of its own type.

        Values without attributes (simple values, tuples, containers) are
        cloned as a whole.

        Raises:
            InvalidInputError: If ``source`` is None.
            TypeNotInstantiableError: If the type has no zero-argument constructor.
            CopyError: If any attribute cannot be cloned.
        """
        verify_source(source)
        source_type = type(source)
        if container_kind(source) is not None or is_simple_type(source_type) or issubclass(source_type, tuple):
            return self._containers.clone(source, source_type)
        return self.copy_to(source, source_type)

    def copy_to(self, source: Any, destination_type: type[T]) -> T:
        """Copy ``source`` into a new instance of ``destination_type``.

        Args:
            source: Object to copy from.
            destination_type: Class with a zero-argument constructor.

        Returns:
            The populated destination.

        Raises:
            InvalidInputError: If ``source`` is None.
            TypeNotInstantiableError: If ``destination_type`` cannot be built.
            CopyError: If any attribute cannot be cloned.
        """
        verify_source(source)
        destination = new_instance(destination_type)
        self.copy_into(source, destination)
        return destination

    def copy_into(self, source: Any, destination: Any) -> None:
        """Overwrite the attributes of ``destination`` that match ``source``.

        Nothing is written unless every matched attribute was resolved.

        Raises:
            InvalidInputError: If ``source`` or ``destination`` is None.
            CopyError: If any attribute cannot be cloned.
        """
        verify_source_and_destination(source, destination)
        try:
            pairs = self._fields.matched_pairs(source, destination)
            values = self._resolve_pairs(source, pairs)
        except CopyError:
            raise
        except Exception as exc:
            raise ConversionError(
                f"Could not copy {type_name(type(source))} into {type_name(type(destination))}: {exc}"
            ) from exc
        for (_, dest_attr), value in zip(pairs, values, strict=True):
            object.__setattr__(destination, dest_attr.name, value)

    def copy_all(self, items: Collection[Any], destination_type: type[T] | None = None) -> list[T]:
        """Copy every item, into ``destination_type`` or each item's own type.

        Raises:
            InvalidInputError: If ``items`` is None or empty.
        """
        verify_collection(items)
        return [self._copy_item(item, destination_type) for item in items]

    def copy_all_with(
        self,
        items: Collection[Any],
        factory: Callable[[list[Any]], R],
        destination_type: type | None = None,
    ) -> R:
        """Copy every item and collect the copies with ``factory``.

        Args:
            items: Objects to copy.
            factory: Builds the result container from the list of copies,
                e.g. ``set`` or ``tuple``.
            destination_type: Class of each copy, each item's own type if None.

        Raises:
            InvalidInputError: If ``items`` is empty or ``factory`` is None.
        """
        verify_collection_and_factory(items, factory)
        return factory([self._copy_item(item, destination_type) for item in items])

    def close(self) -> None:
        """Shut down the worker pool, if one was started."""
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)
            log_info("Stopped copy worker pool")

    def __enter__(self) -> CopyEngine:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _copy_item(self, item: Any, destination_type: type | None) -> Any:
        if destination_type is None:
            return self.copy(item)
        return self.copy_to(item, destination_type)

    def _resolve_pairs(self, source: Any, pairs: Sequence[MatchedPair]) -> list[Any]:
        if self._should_parallelize(len(pairs)):
            return self._resolve_parallel(source, pairs)
        return [self._orchestrator.resolve_value(s, d, source) for s, d in pairs]

    def _should_parallelize(self, pair_count: int) -> bool:
        return (
            self._settings.parallel
            and pair_count > self._settings.parallel_threshold
            and not getattr(self._worker, "active", False)
        )

    def _resolve_parallel(self, source: Any, pairs: Sequence[MatchedPair]) -> list[Any]:
        log_debug("Resolving attributes in parallel", source_type=type_name(type(source)), pairs=len(pairs))
        executor = self._get_executor()
        futures: list[Future[Any]] = [
            executor.submit(self._resolve_in_worker, source, s, d) for s, d in pairs
        ]
        wait(futures)
        for future in futures:
            error = future.exception()
            if error is not None:
                raise error
        return [future.result() for future in futures]

    def _resolve_in_worker(self, source: Any, source_attr: Attribute, dest_attr: Attribute) -> Any:
        # Nested copies on a worker run sequentially so the pool never waits on itself.
        self._worker.active = True
        try:
            return self._orchestrator.resolve_value(source_attr, dest_attr, source)
        finally:
            self._worker.active = False

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._settings.max_workers, thread_name_prefix="objectfactory"
                )
                log_info("Started copy worker pool", max_workers=self._settings.max_workers)
            return self._executor
