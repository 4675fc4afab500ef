"""
clusterlens - host identity

Brokers are reported by a live connection with the advertised host while the
operator may have configured them by IP, or the other way around. Hosts are
therefore compared on their resolved addresses instead of their names.

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from __future__ import annotations

from cachetools import TTLCache
from clusterlens.config import Config
from clusterlens.constants import (
    DEFAULT_HOST_RESOLUTION_CACHE_SIZE,
    DEFAULT_HOST_RESOLUTION_CACHE_TTL,
    DEFAULT_HOST_RESOLUTION_WORKERS,
    HOST_RESOLUTION_TIMEOUT,
)
from clusterlens.errors import HostResolutionFailure
from collections.abc import Callable, MutableMapping
from concurrent.futures import ThreadPoolExecutor, wait

import logging
import socket
import threading

LOG = logging.getLogger(__name__)

HostResolver = Callable[[str], frozenset[str]]


def resolve_host_addresses(host: str) -> frozenset[str]:
    try:
        infos = socket.getaddrinfo(host, None)
    except (socket.gaierror, UnicodeError) as e:
        raise HostResolutionFailure(f"Could not resolve host {host!r}") from e
    return frozenset(str(info[4][0]) for info in infos)


class HostIdentity:
    def __init__(
        self,
        *,
        workers: int = DEFAULT_HOST_RESOLUTION_WORKERS,
        cache_ttl: float = DEFAULT_HOST_RESOLUTION_CACHE_TTL,
        cache_size: int = DEFAULT_HOST_RESOLUTION_CACHE_SIZE,
        resolver: HostResolver = resolve_host_addresses,
        timeout: float = HOST_RESOLUTION_TIMEOUT,
    ) -> None:
        self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="host-identity")
        self._cache: MutableMapping[tuple[str, str], bool] = TTLCache(maxsize=cache_size, ttl=cache_ttl)
        self._cache_lock = threading.Lock()
        self._resolver = resolver
        self._timeout = timeout

    @classmethod
    def from_config(cls, config: Config) -> HostIdentity:
        return cls(
            workers=config.host_resolution_workers,
            cache_ttl=config.host_resolution_cache_ttl,
            cache_size=config.host_resolution_cache_size,
        )

    def equivalent(self, host_a: str, host_b: str) -> bool:
        """Whether both hosts resolve to the same network address.

        Blocks on name resolution. A host that cannot be resolved is never
        equivalent to anything, the failure is only logged.
        """
        key = (host_a, host_b)
        with self._cache_lock:
            cached = self._cache.get(key)
        if cached is not None:
            return cached

        try:
            result = self._compare(host_a, host_b)
        except HostResolutionFailure as e:
            LOG.warning("Could not compare hosts %s - %s: %s", host_a, host_b, e)
            return False

        with self._cache_lock:
            self._cache[key] = result
        return result

    def _compare(self, host_a: str, host_b: str) -> bool:
        try:
            futures = [self._executor.submit(self._resolver, host) for host in (host_a, host_b)]
        except RuntimeError as e:
            # the pool has been shut down
            raise HostResolutionFailure(f"Host resolution is not available: {e}") from e
        _, not_done = wait(futures, timeout=self._timeout)
        if not_done:
            raise HostResolutionFailure(f"Timed out resolving {host_a!r} or {host_b!r}")
        for future in futures:
            if future.cancelled():
                raise HostResolutionFailure(f"Resolution of {host_a!r} or {host_b!r} was cancelled")
            error = future.exception()
            if error is not None and not isinstance(error, HostResolutionFailure):
                raise HostResolutionFailure(f"Resolver failed: {error!r}") from error
        addresses_a, addresses_b = (future.result() for future in futures)
        return not addresses_a.isdisjoint(addresses_b)

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
