import logging

import pytest

from spotify_playlist_browser import main as main_module
from spotify_playlist_browser.constants import CACHE_FILE, DEFAULT_MARKET, PACKAGE_LOGGER, REQUEST_TIMEOUT
from spotify_playlist_browser.main import (
    Settings,
    check_environment_variables,
    configure_logging,
    main,
    parse_arguments,
)

ENV_VARS = ("SPOTIPY_CLIENT_ID", "SPOTIPY_CLIENT_SECRET", "SPOTIPY_REDIRECT_URI")


@pytest.fixture(autouse=True)
def restore_package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    saved = (logger.level, logger.propagate, list(logger.handlers))
    yield
    for handler in logger.handlers:
        if handler not in saved[2]:
            handler.close()
    logger.level, logger.propagate, logger.handlers = saved[0], saved[1], saved[2]


def test_parse_arguments_defaults() -> None:
    settings = Settings.from_args(parse_arguments([]))

    assert settings == Settings()
    assert settings.cache_path == CACHE_FILE
    assert settings.market == DEFAULT_MARKET
    assert settings.timeout == REQUEST_TIMEOUT
    assert settings.log_level == logging.INFO


def test_parse_arguments_overrides() -> None:
    args = parse_arguments(["--market", "SE", "--timeout", "2.5", "--cache-path", "/tmp/token", "-v"])
    settings = Settings.from_args(args)

    assert settings.market == "SE"
    assert settings.timeout == 2.5
    assert settings.cache_path == "/tmp/token"
    assert settings.log_level == logging.DEBUG


def test_check_environment_variables(monkeypatch, capsys) -> None:
    for var in ENV_VARS:
        monkeypatch.setenv(var, "value")
    assert check_environment_variables()

    monkeypatch.delenv("SPOTIPY_CLIENT_SECRET")
    assert not check_environment_variables()
    assert "SPOTIPY_CLIENT_SECRET" in capsys.readouterr().out


def test_configure_logging_writes_log_file(tmp_path) -> None:
    log_file = tmp_path / "browser.log"
    configure_logging(Settings(log_file=str(log_file), verbose=True))

    logging.getLogger(f"{PACKAGE_LOGGER}.tree").debug("expanded %s", "Revolver")

    logger = logging.getLogger(PACKAGE_LOGGER)
    assert logger.level == logging.DEBUG
    assert not logger.propagate
    for handler in logger.handlers:
        handler.flush()
    assert "expanded Revolver" in log_file.read_text(encoding="utf-8")


def test_main_without_credentials_exits_early(monkeypatch, capsys) -> None:
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)

    def unexpected(settings):
        raise AssertionError("client must not be created")

    monkeypatch.setattr(main_module, "create_spotify_client", unexpected)

    assert main([]) == 1
    assert "Missing required environment variables" in capsys.readouterr().out
