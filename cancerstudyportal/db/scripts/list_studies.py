"""List the identifiers of the studies in the cancer studies database."""
import argparse

from cancerstudyportal.db.database_connection import DBCursor
from cancerstudyportal.db.accessors import StudyAccess

if __name__ == '__main__':
    parser = argparse.ArgumentParser(
        prog='csp db list-studies',
        description='List the identifiers of the studies in the cancer studies database.',
    )
    parser.add_argument(
        '--database-config-file',
        dest='database_config_file',
        type=str,
        required=False,
        help='Provide the file for database configuration. Otherwise the CANCER_STUDY_DATABASE_*'
        ' environment variables are used.',
    )
    args = parser.parse_args()
    with DBCursor(database_config_file=args.database_config_file) as cursor:
        for study in StudyAccess(cursor).get_study_specifiers():
            print(study)
