"""Position source reading fixes from a gpsd daemon over TCP."""

import asyncio
import contextlib
import json
import logging
import time

from src.infrastructure.sensors.protocols import PositionCallback
from src.services.geo.models import CachedPosition, Coordinate

logger = logging.getLogger(__name__)

_WATCH_COMMAND = b'?WATCH={"enable":true,"json":true}\n'


def parse_tpv(line: str) -> Coordinate | None:
    """Extract a coordinate from one gpsd JSON line, if it is a TPV report with a fix."""
    line = line.strip()
    if not line:
        return None
    try:
        msg = json.loads(line)
    except json.JSONDecodeError:
        return None
    if not isinstance(msg, dict) or msg.get("class") != "TPV":
        return None
    lat = msg.get("lat")
    lon = msg.get("lon")
    if lat is None or lon is None:
        return None
    try:
        return Coordinate(float(lat), float(lon))
    except (TypeError, ValueError):
        return None


class GpsdPositionSource:
    """One-shot gpsd client; each request opens a watch and waits for the first TPV fix."""

    def __init__(self, host: str = "localhost", port: int = 2947):
        self._host = host
        self._port = port
        self._last: CachedPosition | None = None
        self._task: asyncio.Task | None = None
        self.last_error: str | None = None

    def is_available(self) -> bool:
        # an outage fails only the request in flight; the next request reconnects
        return True

    def last_known_position(self) -> CachedPosition | None:
        return self._last

    def request_position(self, on_result: PositionCallback, timeout: float) -> None:
        self.cancel_request()
        self._task = asyncio.get_running_loop().create_task(self._fetch(on_result, timeout))

    def cancel_request(self) -> None:
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()

    async def _fetch(self, on_result: PositionCallback, timeout: float) -> None:
        try:
            fix = await asyncio.wait_for(self._read_fix(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("gpsd did not report a fix within %.1fs", timeout)
            fix = None
        except OSError as e:
            self.last_error = str(e)
            logger.warning("gpsd unreachable at %s:%s: %s", self._host, self._port, e)
            fix = None
        if fix is not None:
            self.last_error = None
            self._last = CachedPosition(fix, time.time())
        on_result(fix)

    async def _read_fix(self) -> Coordinate | None:
        reader, writer = await asyncio.open_connection(self._host, self._port)
        try:
            writer.write(_WATCH_COMMAND)
            await writer.drain()
            while True:
                raw = await reader.readline()
                if not raw:
                    return None
                fix = parse_tpv(raw.decode("utf-8", errors="replace"))
                if fix is not None:
                    return fix
        finally:
            writer.close()
            with contextlib.suppress(OSError):
                await writer.wait_closed()
