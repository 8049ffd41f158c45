"""Loguru sink that forwards logs to the wallet TUI's live log panel."""

from typing import Any

from loguru import logger


class TuiLogSink:
    """Loguru sink that forwards logs to Textual RichLog widget.

    Thread Safety:
        Wallet flows log from the Textual event loop, but loguru sinks may
        also be invoked from other threads (e.g. aiohttp's resolver). When
        called off the app thread the sink goes through call_from_thread;
        on the app thread it writes directly.

    Usage:
        sink = TuiLogSink(app)
        sink.install()  # Start forwarding logs
        # ... run app ...
        sink.uninstall()  # Stop forwarding
    """

    LOG_WIDGET_ID = "live-log"

    def __init__(self, app: Any, level: str = "DEBUG") -> None:
        """Initialize the log sink.

        Args:
            app: The Textual App instance to forward logs to.
            level: Minimum level forwarded to the panel.
        """
        self._app = app
        self._level = level
        self._handler_id: int | None = None

    def install(self) -> None:
        """Install this sink into loguru.

        The default stderr handler is removed since stderr is hidden
        behind the TUI.
        """
        logger.remove()

        self._handler_id = logger.add(
            self._write,
            format="{time:HH:mm:ss} | {level: <7} | {message}",
            level=self._level,
            colorize=False,
        )

    def uninstall(self) -> None:
        """Remove this sink from loguru."""
        if self._handler_id is not None:
            logger.remove(self._handler_id)
            self._handler_id = None

    def _write(self, message: str) -> None:
        """Write a log message to the RichLog widget.

        Args:
            message: The formatted log message from loguru.
        """
        text = message.rstrip("\n")

        try:
            self._app.call_from_thread(self._post_log, text)
        except RuntimeError:
            # Already on the app thread
            self._post_log(text)
        except Exception:
            # Logging must never take the app down
            pass

    def _post_log(self, text: str) -> None:
        """Post log to RichLog widget (runs in Textual thread).

        Args:
            text: The log message text.
        """
        try:
            from textual.widgets import RichLog

            log_widget = self._app.query_one(f"#{self.LOG_WIDGET_ID}", RichLog)
            log_widget.write(text)
        except Exception:
            # Widget may not be mounted yet
            pass
