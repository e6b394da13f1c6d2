"""Utility to write the clinical metadata SQL schema into a Postgresql instance."""
from importlib.resources import files

from cancerstudyportal.db.database_connection import DBCursor
from cancerstudyportal.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger(__name__)


class SchemaInfuser:
    """Create the clinical metadata schema in a given database."""
    database_config_file: str | None

    def __init__(self, database_config_file: str | None = None):
        self.database_config_file = database_config_file

    def setup_schema(self, force: bool=False) -> None:
        message = 'This creation tool assumes that the database itself and users are already setup.'
        logger.info(message)
        if force:
            self._execute_script('drop_clinical_schema.sql', 'drop tables from main schema')
        self._execute_script('clinical_schema.sql', 'create tables from main schema')

    def _execute_script(self, filename: str, description: str) -> None:
        logger.info('Executing %s (%s).', filename, description)
        contents = self.get_script(filename)
        with DBCursor(database_config_file=self.database_config_file) as cursor:
            cursor.execute(contents)
        logger.info('Done with %s.', description)

    @staticmethod
    def get_script(filename: str) -> str:
        source = files('cancerstudyportal.db.data_model').joinpath(filename)
        return source.read_text(encoding='utf-8')
