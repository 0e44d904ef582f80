"""
Entry point for the terminal dashboard.

Usage:
    python -m arbdash
    arbdash  # if installed via pip
"""

import asyncio
import signal
import sys


def main() -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success).
    """
    from pydantic import ValidationError

    from arbdash.config.settings import get_settings
    from arbdash.core.poller import PollingController
    from arbdash.dashboard.reporter import CLIReporter
    from arbdash.telemetry.logger import setup_logging
    from arbdash.view.model import DashboardView

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Configuration error: {e}")
        print("\nSet ARBDASH_API_URL (or API_URL) to the price service address,")
        print("e.g. ARBDASH_API_URL=http://localhost:8080")
        return 1

    async_logger = setup_logging(settings.log_level)

    async def run_dashboard() -> int:
        loop = asyncio.get_running_loop()
        quit_event = asyncio.Event()

        # Set up signal handlers
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, quit_event.set)
            except NotImplementedError:
                pass

        async with PollingController.from_settings(settings) as controller:
            view = DashboardView(controller, top_n=settings.top_n, ticker_size=settings.ticker_size)
            reporter = CLIReporter(view)

            def on_input() -> None:
                line = sys.stdin.readline()
                if not line or not reporter.handle_command(line):
                    quit_event.set()
                else:
                    reporter.display()

            try:
                loop.add_reader(sys.stdin, on_input)
                reads_input = True
            except (NotImplementedError, ValueError):
                reads_input = False

            unsubscribe = controller.subscribe(lambda _state: reporter.display())
            reporter.start()
            try:
                await quit_event.wait()
            finally:
                unsubscribe()
                reporter.stop()
                if reads_input:
                    loop.remove_reader(sys.stdin)
        return 0

    try:
        return asyncio.run(run_dashboard())
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 0
    finally:
        async_logger.stop()


if __name__ == "__main__":
    sys.exit(main())
