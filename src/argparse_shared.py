import argparse

from .services.share_service import COMPRESSION_MODES

def get_base_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Parse podcast feeds and build share links")
    parser.add_argument("-e", "--env-file", help="Path to a custom .env file", default=None)
    return parser

def add_log_level_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-l", "--log-level", help="Set log level (DEBUG, INFO, WARNING, ERROR); defaults to LOG_LEVEL from config", default=None)

def add_source_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("source", help="Feed URL or path to a saved feed file")

def add_max_chars_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--max-chars", type=int, help="Character budget for the share code", default=None)

def add_compression_mode_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--mode", choices=COMPRESSION_MODES, help="Compression mode", default="auto")

def add_remove_images_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--remove-images", action="store_true", help="Leave artwork out of the share code")
