"""Bounded-duration beacon scan with first-match early exit."""

import asyncio
import logging
from collections.abc import Iterable

from src.config.constants import MatchMode
from src.infrastructure.sensors.protocols import RadioSource

logger = logging.getLogger(__name__)


def matches_identifier(identifier: str, targets: Iterable[str], mode: MatchMode) -> bool:
    """Apply the match predicate for one discovered identifier.

    Exact mode requires membership in ``targets``. Substring mode requires any
    target to appear inside ``identifier``, ignoring case.
    """
    if not identifier:
        return False
    if mode == MatchMode.EXACT:
        return identifier in targets
    lowered = identifier.casefold()
    return any(target.casefold() in lowered for target in targets if target)


class RadioProximityScanner:
    """Drives one radio scan at a time and reports the first matching identifier."""

    def __init__(self, source: RadioSource):
        self.source = source
        self.discovered_count = 0
        self._active: asyncio.Future | None = None

    def _source_available(self) -> bool:
        try:
            return bool(self.source.is_available())
        except Exception as e:
            logger.warning("Radio availability check failed: %s", e)
            return False

    def cancel(self) -> None:
        """Resolve the in-flight scan (if any) as 'not found'."""
        active, self._active = self._active, None
        if active is not None and not active.done():
            active.set_result(None)

    async def scan(
        self,
        targets: Iterable[str],
        mode: MatchMode,
        timeout: float,
        *,
        verbose: bool = False,
    ) -> str | None:
        """
        Scan for up to ``timeout`` seconds.

        Returns the first discovered identifier that matches ``targets``, or
        None when the window elapses, the driver reports a failure, the radio
        is unavailable, or a newer scan supersedes this one. Once a start has
        been attempted the radio is stopped before this coroutine returns.
        """
        level = logging.INFO if verbose else logging.DEBUG
        target_set = frozenset(targets)

        if not self._source_available():
            logger.log(level, "Radio not available; skipping scan")
            return None

        self.cancel()
        loop = asyncio.get_running_loop()
        found: asyncio.Future = loop.create_future()
        self._active = found
        self.discovered_count = 0

        def handle(identifier: str) -> None:
            if found.done():
                return
            self.discovered_count += 1
            logger.log(level, "Discovered device: %s", identifier)
            if matches_identifier(identifier, target_set, mode):
                logger.log(level, "Device match found: %s", identifier)
                found.set_result(identifier)

        def fail(reason: str) -> None:
            if not found.done():
                logger.log(level, "Radio scan failed: %s", reason)
                found.set_result(None)

        def on_discovered(identifier: str) -> None:
            try:
                loop.call_soon_threadsafe(handle, identifier)
            except RuntimeError:
                # loop already closed: the verification is over
                pass

        def on_failed(reason: str) -> None:
            try:
                loop.call_soon_threadsafe(fail, reason)
            except RuntimeError:
                pass

        logger.log(
            level,
            "Starting radio scan for %d identifiers (mode=%s, timeout=%.1fs)",
            len(target_set),
            mode.value,
            timeout,
        )
        try:
            try:
                await self.source.start_scan(on_discovered, on_failed)
            except Exception as e:
                logger.warning("Radio scan could not start: %s", e, exc_info=verbose)
                return None
            try:
                return await asyncio.wait_for(found, timeout=timeout)
            except asyncio.TimeoutError:
                logger.log(level, "Radio scan timeout reached after %.1fs", timeout)
                return None
        finally:
            # a newer scan owns the radio now; its start already replaced ours
            superseded = self._active is not None and self._active is not found
            if self._active is found:
                self._active = None
            if not superseded:
                await self._stop()

    async def _stop(self) -> None:
        try:
            await self.source.stop_scan()
        except Exception as e:
            logger.warning("Error stopping radio scan: %s", e, exc_info=True)
