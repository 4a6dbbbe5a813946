"""Main entry point for the ATM terminal"""

from .cli import build_terminal
from .config import get_config
from .logging_config import setup_logging


def main():
    """Start the terminal"""
    config = get_config()
    setup_logging(config.log_level, config.log_format)
    build_terminal(config).run()


if __name__ == "__main__":
    main()
