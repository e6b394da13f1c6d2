"""Cancer study portal python package: clinical attribute metadata API."""
from cancerstudyportal.standalone_utilities.configuration_settings import get_version

submodule_names = ['apiserver', 'db']

__version__ = get_version()
