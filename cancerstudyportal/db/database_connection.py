"""
Context managers for short-lived connections to the cancer studies database, used by the API
service's lookups and by the CLI utilities.
"""
import time
from os.path import exists
from os.path import abspath
from os.path import expanduser

from psycopg import connect
from psycopg import Connection as PsycopgConnection
from psycopg import Cursor as PsycopgCursor
from psycopg import Error as PsycopgError
from psycopg import OperationalError
from attr import define

from cancerstudyportal.db.credentials import DBCredentials
from cancerstudyportal.db.credentials import get_credentials_from_environment
from cancerstudyportal.db.credentials import retrieve_credentials_from_file
from cancerstudyportal.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger(__name__)


def get_credentials(database_config_file: str | None) -> DBCredentials:
    """Credentials from the given configuration file, or else from the environment."""
    if database_config_file is not None:
        return retrieve_credentials_from_file(database_config_file)
    return get_credentials_from_environment()


class DBConnection:
    """
    Opens a connection on entry and closes it on exit, committing first unless an exception is
    propagating or autocommit is turned off.
    """
    credentials: DBCredentials
    autocommit: bool
    connection: PsycopgConnection | None

    def __init__(self, database_config_file: str | None = None, autocommit: bool = True):
        self.credentials = get_credentials(database_config_file)
        self.autocommit = autocommit
        self.connection = None

    def open(self) -> PsycopgConnection:
        try:
            self.connection = connect(
                dbname=self.credentials.database,
                host=self.credentials.endpoint,
                user=self.credentials.user,
                password=self.credentials.password,
            )
        except PsycopgError as exception:
            message = 'Failed to connect to database: %s, %s'
            logger.error(message, self.credentials.endpoint, self.credentials.database)
            raise exception
        return self.connection

    def close(self, failed: bool) -> None:
        if self.connection is None:
            return
        if self.autocommit and not failed:
            try:
                self.connection.commit()
            except OperationalError as error:
                logger.warning('Connection was possibly interrupted: %s', error)
        self.connection.close()
        self.connection = None

    def __enter__(self) -> PsycopgConnection:
        return self.open()

    def __exit__(self, exception_type, exception_value, traceback):
        self.close(exception_type is not None)


class DBCursor(DBConnection):
    """Shortcut to a cursor on a fresh connection."""
    cursor: PsycopgCursor | None = None

    def __enter__(self) -> PsycopgCursor:
        self.cursor = self.open().cursor()
        return self.cursor

    def __exit__(self, exception_type, exception_value, traceback):
        if self.cursor is not None:
            self.cursor.close()
            self.cursor = None
        self.close(exception_type is not None)


def get_and_validate_database_config(args) -> str | None:
    """The configuration file named on the command line, or None to use the environment."""
    if args.database_config_file is None:
        return None
    config_file = abspath(expanduser(args.database_config_file))
    if not exists(config_file):
        raise FileNotFoundError(
            f'Need to supply valid database config filename: {config_file}')
    return config_file


def wait_for_database_ready(database_config_file: str | None = None, interval: float = 2.0):
    while not _database_is_ready(database_config_file):
        logger.debug('Database is not ready.')
        time.sleep(interval)
    logger.info('Database is ready.')


def _database_is_ready(database_config_file: str | None) -> bool:
    try:
        with DBCursor(database_config_file=database_config_file) as cursor:
            cursor.execute('SELECT 1 ;')
            cursor.fetchall()
    except PsycopgError:
        return False
    return True


@define
class SimpleReadOnlyProvider:
    """State-holder for one-time read-only accessors sharing a cursor."""
    cursor: PsycopgCursor
