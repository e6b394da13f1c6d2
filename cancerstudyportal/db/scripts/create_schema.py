"""CLI utility to create the clinical metadata schema in a given Postgresql instance."""
import argparse

from cancerstudyportal.db.database_connection import get_and_validate_database_config
from cancerstudyportal.db.schema_infuser import SchemaInfuser
from cancerstudyportal.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger('csp db create-schema')

if __name__ == '__main__':
    parser = argparse.ArgumentParser(
        prog='csp db create-schema',
        description='Create the clinical metadata tables in the cancer studies database.'
    )
    parser.add_argument(
        '--database-config-file',
        dest='database_config_file',
        type=str,
        required=False,
        help='Provide the file for database configuration. Otherwise the CANCER_STUDY_DATABASE_*'
        ' environment variables are used.',
    )
    parser.add_argument(
        '--force',
        dest='force',
        action='store_true',
        help='By default, tables are created only if they don\'t already exist. '
        'If "force" is set, all tables from the schema are dropped first. '
        'Obviously, use with care; all data in existing tables will be deleted.',
    )
    args = parser.parse_args()

    config_file = get_and_validate_database_config(args)
    SchemaInfuser(database_config_file=config_file).setup_schema(force=args.force)
