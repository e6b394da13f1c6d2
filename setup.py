import setuptools
from os.path import join, dirname

def get_file_contents(filename):
    package_directory = dirname(__file__)
    with open(join(package_directory, filename), 'r', encoding='utf-8') as file:
        contents = file.read()
    return contents

long_description = """REST API serving the clinical attribute metadata of the studies in a cancer
study portal database.
"""
version = get_file_contents(join('cancerstudyportal', 'version.txt')).strip()

setuptools.setup(
    name='cancerstudyportal',
    version=version,
    description='Clinical attribute metadata API for cancer study portals.',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=[
        'cancerstudyportal',
        'cancerstudyportal.entry_point',
        'cancerstudyportal.standalone_utilities',
        'cancerstudyportal.apiserver',
        'cancerstudyportal.apiserver.app',
        'cancerstudyportal.apiserver.scripts',
        'cancerstudyportal.db',
        'cancerstudyportal.db.accessors',
        'cancerstudyportal.db.exchange_data_formats',
        'cancerstudyportal.db.scripts',
        'cancerstudyportal.db.data_model',
    ],
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: Apache Software License',
        'Topic :: Scientific/Engineering',
        'Intended Audience :: Science/Research',
    ],
    package_data={
        'cancerstudyportal': [
            'version.txt',
        ],
        'cancerstudyportal.apiserver.scripts' : [
            'dump_schema.py',
            'start.py',
        ],
        'cancerstudyportal.db.scripts' : [
            'create_schema.py',
            'list_studies.py',
        ],
        'cancerstudyportal.db.data_model': [
            'clinical_schema.sql',
            'drop_clinical_schema.sql',
        ],
    },
    python_requires='>=3.10',
    entry_points={
        'console_scripts' : [
            'csp = cancerstudyportal.entry_point.cli:main_program',
        ]
    },
    install_requires=[
        'psycopg[binary]>=3.1',
        'attrs>=22.2',
        'fastapi>=0.100.0',
        'pydantic>=2.0',
        'uvicorn>=0.22.0',
        'secure>=1.0.0',
    ],
    extras_require={
        'test': ['pytest>=7.0', 'httpx>=0.24'],
    },
)
