"""Main entry point for the PairAgent demo service."""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from device import SequenceRunner
from pairagent.api import create_fastapi_app
from pairagent.app import Application
from pairagent.config import Settings
from pairagent.logging_config import setup_logging
from pairagent.payments import create_payment_executor


def main():
    """Run the application."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")

    settings = Settings.from_env()
    setup_logging(settings.log_level)

    # Device runner talks to this same API over HTTP
    runner = SequenceRunner(
        api_url=settings.api_url,
        executor=create_payment_executor(settings),
        pace=settings.runner_pace,
    )

    # Set runner instance for control router
    from pairagent.api.routes import control
    control.set_runner_instance(runner)

    app = create_fastapi_app(Application(settings))

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
