"""Structures and accessors for database credentials."""
from os import environ
import configparser

from attr import define

from cancerstudyportal.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger(__name__)


@define
class DBCredentials:
    """Data structure for database credentials."""
    endpoint: str
    database: str
    user: str
    password: str


def main_database_name() -> str:
    return environ.get('CANCER_STUDY_DATABASE_NAME', 'cancer_studies')


def get_credentials_from_environment() -> DBCredentials:
    _handle_unavailability()
    return DBCredentials(
        environ['CANCER_STUDY_DATABASE_HOST'],
        main_database_name(),
        environ['CANCER_STUDY_DATABASE_USER'],
        environ['CANCER_STUDY_DATABASE_PASSWORD'],
    )


class MissingKeysError(ValueError):
    def __init__(self, missing: set[str]):
        self.missing = missing
        message = f'Database configuration file is missing keys: {missing}'
        super().__init__(message)


def retrieve_credentials_from_file(database_config_file: str) -> DBCredentials:
    parser = configparser.ConfigParser()
    credentials = {}
    parser.read(database_config_file)
    if 'database-credentials' in parser.sections():
        section = parser['database-credentials']
        for key in set(_get_credential_keys()).intersection(section.keys()):
            credentials[key] = section[key]
        database = section.get('database', main_database_name())
    else:
        database = main_database_name()
    missing = set(_get_credential_keys()).difference(credentials.keys())
    if len(missing) > 0:
        raise MissingKeysError(missing)
    return DBCredentials(
        credentials['endpoint'],
        database,
        credentials['user'],
        credentials['password'],
    )


def _handle_unavailability():
    variables = [
        'CANCER_STUDY_DATABASE_HOST',
        'CANCER_STUDY_DATABASE_USER',
        'CANCER_STUDY_DATABASE_PASSWORD',
    ]
    unfound = [v for v in variables if not v in environ]
    if len(unfound) > 0:
        logger.error('Database credentials are not configured.')
        raise EnvironmentError(f'Did not find in environment: {str(unfound)}')


def _get_credential_keys():
    return ['endpoint', 'user', 'password']
