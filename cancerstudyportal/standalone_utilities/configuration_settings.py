"""Configuration settings."""
from importlib.metadata import version
from importlib.metadata import PackageNotFoundError
from importlib.resources import files
from os import environ
from warnings import warn


def get_version():
    _version = 'unknown'
    try:
        _version = version('cancerstudyportal')
    except PackageNotFoundError:
        warn('cancerstudyportal package is used but not installed.')
        _version = files('cancerstudyportal').joinpath('version.txt').read_text(encoding='utf-8').rstrip()
    return _version


def get_api_server_host() -> str:
    return environ.get('API_SERVER_HOST', '0.0.0.0')


def get_api_server_port() -> int:
    port = environ.get('API_SERVER_PORT', '8080')
    if not port.isdigit():
        raise EnvironmentError(f'API_SERVER_PORT is not a port number: "{port}"')
    return int(port)
