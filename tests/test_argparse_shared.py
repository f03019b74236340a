"""Tests for argparse_shared module."""

import argparse
import pytest

from src.argparse_shared import (
    get_base_parser,
    add_compression_mode_argument,
    add_log_level_argument,
    add_max_chars_argument,
    add_remove_images_argument,
    add_source_argument,
)


class TestGetBaseParser:
    """Tests for get_base_parser function."""

    def test_returns_argument_parser(self):
        """Test that get_base_parser returns an ArgumentParser."""
        parser = get_base_parser()
        assert isinstance(parser, argparse.ArgumentParser)

    def test_has_env_file_argument(self):
        """Test that the parser has --env-file argument."""
        parser = get_base_parser()
        args = parser.parse_args(["-e", "/path/to/.env"])
        assert args.env_file == "/path/to/.env"

    def test_env_file_defaults_to_none(self):
        """Test that env-file defaults to None."""
        parser = get_base_parser()
        args = parser.parse_args([])
        assert args.env_file is None


class TestAddLogLevelArgument:
    """Tests for add_log_level_argument function."""

    def test_adds_log_level_argument(self):
        """Test that log-level argument is added."""
        parser = argparse.ArgumentParser()
        add_log_level_argument(parser)
        args = parser.parse_args(["--log-level", "DEBUG"])
        assert args.log_level == "DEBUG"

    def test_log_level_defaults_to_none(self):
        """Test that log-level defaults to None so config decides."""
        parser = argparse.ArgumentParser()
        add_log_level_argument(parser)
        args = parser.parse_args([])
        assert args.log_level is None

    def test_help_mentions_config_default(self):
        """Test that the help text says config LOG_LEVEL applies by default."""
        parser = argparse.ArgumentParser()
        add_log_level_argument(parser)
        assert "LOG_LEVEL" in parser.format_help()

    def test_short_form_log_level(self):
        """Test the short form -l argument."""
        parser = argparse.ArgumentParser()
        add_log_level_argument(parser)
        args = parser.parse_args(["-l", "WARNING"])
        assert args.log_level == "WARNING"


class TestAddSourceArgument:
    """Tests for add_source_argument function."""

    def test_adds_source_argument(self):
        """Test that the positional source is added."""
        parser = argparse.ArgumentParser()
        add_source_argument(parser)
        args = parser.parse_args(["https://example.com/feed.xml"])
        assert args.source == "https://example.com/feed.xml"

    def test_source_is_required(self):
        """Test that source is required."""
        parser = argparse.ArgumentParser()
        add_source_argument(parser)
        with pytest.raises(SystemExit):
            parser.parse_args([])


class TestAddMaxCharsArgument:
    """Tests for add_max_chars_argument function."""

    def test_parses_integer(self):
        """Test that max-chars is parsed as an int."""
        parser = argparse.ArgumentParser()
        add_max_chars_argument(parser)
        args = parser.parse_args(["--max-chars", "500"])
        assert args.max_chars == 500

    def test_defaults_to_none(self):
        """Test that max-chars defaults to None."""
        parser = argparse.ArgumentParser()
        add_max_chars_argument(parser)
        args = parser.parse_args([])
        assert args.max_chars is None

    def test_rejects_non_integer(self):
        """Test that a non-numeric budget is rejected."""
        parser = argparse.ArgumentParser()
        add_max_chars_argument(parser)
        with pytest.raises(SystemExit):
            parser.parse_args(["--max-chars", "lots"])


class TestAddCompressionModeArgument:
    """Tests for add_compression_mode_argument function."""

    def test_defaults_to_auto(self):
        """Test that the mode defaults to auto."""
        parser = argparse.ArgumentParser()
        add_compression_mode_argument(parser)
        args = parser.parse_args([])
        assert args.mode == "auto"

    @pytest.mark.parametrize("mode", ["full", "auto", "minimal"])
    def test_accepts_known_modes(self, mode):
        """Test each supported mode."""
        parser = argparse.ArgumentParser()
        add_compression_mode_argument(parser)
        args = parser.parse_args(["--mode", mode])
        assert args.mode == mode

    def test_rejects_unknown_mode(self):
        """Test that unknown modes are rejected."""
        parser = argparse.ArgumentParser()
        add_compression_mode_argument(parser)
        with pytest.raises(SystemExit):
            parser.parse_args(["--mode", "extreme"])


class TestAddRemoveImagesArgument:
    """Tests for add_remove_images_argument function."""

    def test_adds_remove_images_argument(self):
        """Test that remove-images argument is added."""
        parser = argparse.ArgumentParser()
        add_remove_images_argument(parser)
        args = parser.parse_args(["--remove-images"])
        assert args.remove_images is True

    def test_remove_images_defaults_to_false(self):
        """Test that remove-images defaults to False."""
        parser = argparse.ArgumentParser()
        add_remove_images_argument(parser)
        args = parser.parse_args([])
        assert args.remove_images is False


class TestCombinedArguments:
    """Tests for combining multiple arguments."""

    def test_all_arguments_together(self):
        """Test using all argument helpers together."""
        parser = get_base_parser()
        add_log_level_argument(parser)
        add_source_argument(parser)
        add_max_chars_argument(parser)
        add_compression_mode_argument(parser)
        add_remove_images_argument(parser)

        args = parser.parse_args([
            "-e", "/path/.env",
            "-l", "DEBUG",
            "feed.xml",
            "--max-chars", "800",
            "--mode", "minimal",
            "--remove-images",
        ])

        assert args.env_file == "/path/.env"
        assert args.log_level == "DEBUG"
        assert args.source == "feed.xml"
        assert args.max_chars == 800
        assert args.mode == "minimal"
        assert args.remove_images is True
