"""Main application class and entry point."""

import logging
import sys

from .controllers.application_controller import ApplicationController
from .utils.error_handler import ErrorHandler
from .utils.logging_config import setup_logging

EXIT_INTERRUPTED = 130


class CmdyApp:
    """Main application class for cmdy."""

    def __init__(self, controller: ApplicationController | None = None):
        self.controller = controller
        self.error_handler = ErrorHandler()
        self.logger = logging.getLogger(__name__)

    def initialize(self) -> None:
        """Initialize the application."""
        setup_logging()
        if self.controller is None:
            self.controller = ApplicationController()
        self.logger.debug("cmdy initialized")

    def run(self, args: list[str]) -> int:
        """Run the subcommand given on the command line."""
        if self.controller is None:
            raise RuntimeError("Application not initialized. Call initialize() first.")

        return self.controller.dispatch(args)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the application."""
    args = sys.argv[1:] if argv is None else argv
    app = CmdyApp()

    try:
        app.initialize()
        return app.run(args)
    except (KeyboardInterrupt, EOFError):
        logging.getLogger(__name__).info("Interrupted by user")
        app.error_handler.console.print("\nAborted.")
        return EXIT_INTERRUPTED
    except Exception as e:
        return app.error_handler.handle_error(e)


if __name__ == "__main__":
    sys.exit(main())
