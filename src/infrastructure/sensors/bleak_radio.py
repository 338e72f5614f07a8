"""BLE radio source built on bleak."""

import logging

from bleak import BleakScanner
from bleak.backends.device import BLEDevice
from bleak.backends.scanner import AdvertisementData
from bleak.exc import BleakError

from src.infrastructure.sensors.protocols import DiscoveryCallback, ScanFailedCallback

logger = logging.getLogger(__name__)


class BleakRadioSource:
    """Radio source that reports the advertised local name of nearby BLE devices."""

    def __init__(self, adapter: str | None = None):
        self._adapter = adapter
        self._scanner: BleakScanner | None = None
        self.last_error: str | None = None

    def is_available(self) -> bool:
        # adapter state is only known once a start is attempted
        return True

    async def start_scan(
        self,
        on_discovered: DiscoveryCallback,
        on_failed: ScanFailedCallback | None = None,
    ) -> None:
        await self.stop_scan()

        def detection_callback(device: BLEDevice, adv: AdvertisementData) -> None:
            name = adv.local_name or device.name
            if name:
                on_discovered(name)

        kwargs: dict = {"detection_callback": detection_callback}
        if self._adapter:
            kwargs["adapter"] = self._adapter
        scanner = BleakScanner(**kwargs)
        try:
            await scanner.start()
        except BleakError as e:
            # adapter missing or powered off; fails this scan only
            self.last_error = str(e)
            logger.warning("BLE scan could not start: %s", e)
            if on_failed is not None:
                on_failed(str(e))
            return
        self.last_error = None
        self._scanner = scanner
        logger.debug("BLE scan started (adapter=%s)", self._adapter or "default")

    async def stop_scan(self) -> None:
        scanner, self._scanner = self._scanner, None
        if scanner is None:
            return
        try:
            await scanner.stop()
        except BleakError as e:
            logger.warning("Error stopping BLE scan: %s", e)
