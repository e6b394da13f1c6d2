"""Start the API server, once the database accepts connections."""
from argparse import ArgumentParser

import uvicorn

from cancerstudyportal.db.database_connection import wait_for_database_ready
from cancerstudyportal.standalone_utilities.configuration_settings import get_api_server_host
from cancerstudyportal.standalone_utilities.configuration_settings import get_api_server_port
from cancerstudyportal.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger('csp apiserver start')


if __name__=='__main__':
    parser = ArgumentParser(
        prog='csp apiserver start',
        description='Serve the clinical attributes API. Host and port are read from API_SERVER_HOST'
        ' and API_SERVER_PORT; database credentials from the CANCER_STUDY_DATABASE_* variables.',
    )
    parser.add_argument(
        '--skip-database-wait',
        dest='skip_database_wait',
        action='store_true',
        help='Start immediately, without waiting for the database to accept connections.',
    )
    args = parser.parse_args()
    if not args.skip_database_wait:
        wait_for_database_ready()
    host = get_api_server_host()
    port = get_api_server_port()
    logger.info('Serving on %s:%s.', host, port)
    uvicorn.run('cancerstudyportal.apiserver.app.main:app', host=host, port=port)
