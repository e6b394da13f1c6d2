"""The entry point into `csp` CLI commands."""
import argparse
import sys
import subprocess
from importlib.resources import as_file
from importlib.resources import files
import re
import signal

import cancerstudyportal
from cancerstudyportal import submodule_names


def get_commands(submodule_name):
    _files = files(f'cancerstudyportal.{submodule_name}')
    scripts = [
        re.search('/scripts/(.*)$', str(entry))
        for entry in (_files / 'scripts').iterdir()
    ]
    return sorted([
        underscore_to_hyphen(re.sub(r'\.py$', '', script.group(1)))
        for script in scripts
        if script
        and re.search(r'\.py$', script.group(1))
        and not re.search(r'^__.*__(\.py)?$', script.group(1))
    ])


def underscore_to_hyphen(string, inverse=False):
    if not inverse:
        return re.sub('_', '-', string)
    return re.sub('-', '_', string)


def get_executable_and_script(submodule_name, script_name_hyphenated):
    script_name = underscore_to_hyphen(script_name_hyphenated, inverse=True)
    _file = files(f'cancerstudyportal.{submodule_name}.scripts').joinpath(f'{script_name}.py')
    if not _file.is_file():
        raise ValueError(f'Did not locate {script_name} from submodule "{submodule_name}".')
    with as_file(_file) as path:
        script_path = path
    return sys.executable, script_path


def print_version_and_all_commands():
    commands_description = '\n\n'.join([
        '\n'.join(
            [f'csp {submodule} {command}' for command in get_commands(submodule)]
        )
        for submodule in submodule_names
    ])
    print(f'Version {cancerstudyportal.__version__}')
    print('')
    print(commands_description)


def main_program():
    parser = argparse.ArgumentParser(
        prog='csp',
        description='cancerstudyportal commands',
    )
    parser.add_argument(
        'module',
        choices=submodule_names,
        help='The specific submodule the command is from.',
    )
    parser.add_argument(
        'command',
        nargs='?',
        default=None,
        help='The command name.',
    )
    parser.add_argument(
        'command_arguments',
        nargs='*',
        help='Arguments passed to the command.',
    )

    module = None
    if len(sys.argv) >= 2:
        if sys.argv[1] in submodule_names:
            module = sys.argv[1]

    if module is None:
        print_version_and_all_commands()
        sys.exit()

    command = None
    if len(sys.argv) >= 3:
        if sys.argv[2] in get_commands(module):
            command = sys.argv[2]

    if command is None:
        commands = get_commands(module)
        print('    '.join(commands))
        sys.exit()

    executable, script_path = get_executable_and_script(module, command)
    unparsed_arguments = sys.argv[3:]
    terminate = signal.SIGTERM
    interrupt = signal.SIGINT
    with subprocess.Popen([executable, script_path,] + unparsed_arguments) as running_process:
        signal.signal(terminate, lambda signum, frame: running_process.send_signal(terminate))
        signal.signal(interrupt, lambda signum, frame: running_process.send_signal(interrupt))
        exit_code = running_process.wait()
    sys.exit(exit_code)
