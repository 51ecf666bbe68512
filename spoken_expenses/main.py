"""Entry point — wires Config → ExpenseExtractor → TelegramClient."""
import logging

from rich.logging import RichHandler

from spoken_expenses.config import Config
from spoken_expenses.constants import MSG_BOT_STARTING
from spoken_expenses.expenses.factory import build_extractor
from spoken_expenses.telegram.client import TelegramClient


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))


def main() -> None:
    config = Config.from_env()
    _setup_logging(config.log_level)

    logger = logging.getLogger(__name__)
    logger.info(MSG_BOT_STARTING)

    extractor = build_extractor(config)
    client = TelegramClient(config, extractor=extractor)
    client.run()


if __name__ == "__main__":
    main()
