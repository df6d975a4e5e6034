"""Application entry point for the helpdesk server."""

from helpdesk.app import App
from helpdesk.config import Config
from helpdesk.logging import setup_logging
from helpdesk.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
