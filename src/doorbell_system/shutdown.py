"""
Shutdown coordination - signal handling and one-time GPIO release
"""

import signal
import threading
from typing import Dict, Iterable, Optional

from button_system.interfaces import IGpio, GpioError

EXIT_FATAL = 1


class ShutdownCoordinator:
    """
    Owns the shared cancellation event and the GPIO release.

    request_shutdown() may be called from signal handlers and worker threads;
    the first call decides the exit status. release() closes the GPIO
    capability exactly once and does not wait for the loops to finish their
    current tick.

    Example:
        shutdown = ShutdownCoordinator(gpio, logger)
        shutdown.install()              # SIGINT/SIGTERM -> request_shutdown()
        shutdown.cancel_event.wait()
        shutdown.release()
        sys.exit(shutdown.exit_code)
    """

    def __init__(self, gpio: IGpio, logger, cancel_event: Optional[threading.Event] = None):
        """
        Args:
            gpio: GPIO capability to close on shutdown
            logger: ClassLogger instance for logging
            cancel_event: Shared cancellation token (created when None)
        """
        self._gpio = gpio
        self._logger = logger
        self.cancel_event = cancel_event if cancel_event is not None else threading.Event()
        # Reentrant: a second signal can arrive while the handler runs
        self._request_lock = threading.RLock()
        self._release_lock = threading.Lock()
        self._exit_code: Optional[int] = None
        self._reason: Optional[str] = None
        self._released = False
        self._previous_handlers: Dict[int, object] = {}

    @property
    def exit_code(self) -> Optional[int]:
        """Exit status chosen by the first shutdown request, None while running"""
        return self._exit_code

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    @property
    def released(self) -> bool:
        return self._released

    def install(self, signals: Iterable[int] = (signal.SIGINT, signal.SIGTERM)) -> None:
        """Register signal handlers (main thread only)"""
        for signum in signals:
            self._previous_handlers[signum] = signal.signal(signum, self._handle_signal)
        self._logger.debug("Signal handlers installed")

    def uninstall(self) -> None:
        """Restore the handlers that were active before install()"""
        for signum, handler in self._previous_handlers.items():
            signal.signal(signum, handler)
        self._previous_handlers.clear()

    def _handle_signal(self, signum, frame) -> None:
        name = signal.Signals(signum).name
        self._logger.critical(f"⚠️  SIGNAL RECEIVED: {name} - shutting down")
        self.request_shutdown(f"signal {name}", 128 + signum)

    def request_shutdown(self, reason: str, exit_code: int = EXIT_FATAL) -> bool:
        """
        Ask every loop to stop at its next tick boundary.

        Returns:
            True if this call initiated the shutdown, False if one was already requested
        """
        with self._request_lock:
            if self._exit_code is not None:
                self._logger.debug(f"Shutdown already requested, ignoring: {reason}")
                return False
            self._exit_code = exit_code
            self._reason = reason
            self.cancel_event.set()
        self._logger.info(f"Shutdown requested: {reason} (exit status {exit_code})")
        return True

    def release(self) -> bool:
        """
        Close the GPIO capability once.

        Returns:
            True if this call performed the release, False if it already happened
        """
        with self._release_lock:
            if self._released:
                return False
            self._released = True
        self._logger.info("cleanup")
        try:
            self._gpio.close()
        except GpioError as e:
            self._logger.error(f"GPIO release failed: {e}", exception=e)
        self._logger.flush()
        return True
