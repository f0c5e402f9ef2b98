import configparser
import functools
import os
import sys
from pathlib import Path

import click
from loguru import logger

CONFIG_PATH = os.path.expanduser("~/.rpe.ini")
ENV_PREFIX = "RPE_"


def _cast(value, type_cast, option_name):
    if type_cast is bool:
        return value.lower() in ("true", "1", "yes")
    if "path" in option_name or issubclass(type_cast, Path):
        return os.path.expanduser(value)
    return type_cast(value)


def _get_env_value(option_name, type_cast=str, env_var=None):
    if env_var is None:
        env_var = f"{ENV_PREFIX}{option_name.upper()}"
    if env_value := os.getenv(env_var):
        try:
            return _cast(env_value, type_cast, option_name)
        except ValueError as e:
            logger.warning(f"Ignoring {env_var}={env_value!r}: {e}")
    return None


def _get_file_value(option_name, type_cast=str, config_section="common"):
    config = configparser.ConfigParser()
    config.read_dict({config_section: {}})
    if Path(CONFIG_PATH).exists():
        config.read(CONFIG_PATH)

    if config.has_section(config_section):
        if config_value := config.get(config_section,
                                      option_name,
                                      fallback=None):
            try:
                return _cast(config_value, type_cast, option_name)
            except ValueError as e:
                logger.warning(f"Ignoring [{config_section}] {option_name}="
                               f"{config_value!r} in {CONFIG_PATH}: {e}")
    return None


def get_config_value(option_name,
                     type_cast=str,
                     command_name=None,
                     default=None,
                     env_var=None):
    """
    Look up a default for a command line option.

    Priority:
    1. command line argument (handled by click)
    2. environment variable, ``env_var`` or ``RPE_<OPTION_NAME>``
    3. ``[command_name]`` section of ``~/.rpe.ini``
    4. ``[common]`` section of ``~/.rpe.ini``
    5. ``default``

    A value that cannot be converted with ``type_cast`` is logged and
    ``default`` is used instead.
    """
    value = _get_env_value(option_name, type_cast, env_var)
    if value is None and command_name is not None:
        value = _get_file_value(option_name, type_cast, command_name)
    if value is None:
        value = _get_file_value(option_name, type_cast)
    return default if value is None else value


def log_options(func):
    """Logging options shared by all commands."""

    @click.option("--debug",
                  is_flag=True,
                  default=lambda: get_config_value("debug", bool, default=False),
                  help="Enable debug mode")
    @click.option("--log",
                  type=click.Path(),
                  default=lambda: get_config_value("log", Path),
                  help="Log file path")
    @click.option("--debug-log",
                  type=click.Path(),
                  default=lambda: get_config_value("debug_log", Path),
                  help="Debug log file path")
    @click.option("--quiet",
                  is_flag=True,
                  default=lambda: get_config_value("quiet", bool, default=False),
                  help="Disable log output")
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        debug = bool(kwargs.pop("debug"))
        log = kwargs.pop("log")
        debug_log = kwargs.pop("debug_log")
        quiet = bool(kwargs.pop("quiet"))

        if debug:
            log_level = "DEBUG"
        else:
            log_level = "INFO"

        handlers = []
        if log is not None:
            handlers.append(
                dict(sink=log,
                     level="INFO",
                     rotation="monday at 7:00",
                     compression="zip"))
        if debug_log is not None:
            handlers.append(
                dict(sink=debug_log,
                     level="DEBUG",
                     rotation="monday at 7:00",
                     compression="zip"))
        if not quiet or debug:
            handlers.append(dict(sink=sys.stderr, level=log_level))

        logger.configure(handlers=handlers)

        return func(*args, **kwargs)

    return wrapper
