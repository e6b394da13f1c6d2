"""Shared fixtures: the API app wired to in-memory stand-ins for the database-backed components."""
from threading import Lock

import pytest
from fastapi.testclient import TestClient

from cancerstudyportal.apiserver.app.main import app
from cancerstudyportal.apiserver.app.main import get_clinical_attribute_service
from cancerstudyportal.apiserver.app.authorization import StudyAccessGuard
from cancerstudyportal.apiserver.app.authorization import StudyPermissionLookup
from cancerstudyportal.apiserver.app.authorization import get_access_guard
from cancerstudyportal.db.querying import ClinicalAttributeService
from cancerstudyportal.db.exceptions import StudyNotFoundError
from cancerstudyportal.db.exceptions import ClinicalAttributeNotFoundError
from cancerstudyportal.db.exchange_data_formats.clinical_attributes import ClinicalAttribute
from cancerstudyportal.db.exchange_data_formats.clinical_attributes import ClinicalAttributeMeta

KNOWN_STUDIES = ('acc_tcga', 'brca_tcga', 'private_study')


def make_attribute(attribute_id: str, study_id: str, **kwargs) -> ClinicalAttribute:
    values = {
        'clinical_attribute_id': attribute_id,
        'display_name': attribute_id.replace('_', ' ').title(),
        'description': f'{attribute_id} description',
        'datatype': 'STRING',
        'patient_attribute': False,
        'priority': '1',
        'study_id': study_id,
    }
    values.update(kwargs)
    return ClinicalAttribute(**values)


class RecordingClinicalAttributeService(ClinicalAttributeService):
    """Returns canned attributes and records each call by name and arguments."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.total_count = 42
        self.attributes = [
            make_attribute('CANCER_TYPE', 'acc_tcga'),
            make_attribute('AGE', 'acc_tcga', datatype='NUMBER', patient_attribute=True),
        ]
        self._lock = Lock()

    def _record(self, *call):
        with self._lock:
            self.calls.append(call)

    def called(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]

    def _check_study(self, study_id):
        if study_id not in KNOWN_STUDIES:
            raise StudyNotFoundError(study_id)

    def get_all_clinical_attributes(self, projection, page_size, page_number, sort_by, direction):
        self._record('get_all_clinical_attributes', projection, page_size, page_number, sort_by, direction)
        return self.attributes

    def get_meta_clinical_attributes(self):
        self._record('get_meta_clinical_attributes')
        return ClinicalAttributeMeta(total_count=self.total_count)

    def get_all_clinical_attributes_in_study(
        self, study_id, projection, page_size, page_number, sort_by, direction,
    ):
        self._record(
            'get_all_clinical_attributes_in_study',
            study_id, projection, page_size, page_number, sort_by, direction,
        )
        self._check_study(study_id)
        return [a for a in self.attributes if a.study_id == study_id]

    def get_meta_clinical_attributes_in_study(self, study_id):
        self._record('get_meta_clinical_attributes_in_study', study_id)
        self._check_study(study_id)
        return ClinicalAttributeMeta(total_count=self.total_count)

    def get_clinical_attribute(self, study_id, clinical_attribute_id):
        self._record('get_clinical_attribute', study_id, clinical_attribute_id)
        self._check_study(study_id)
        for attribute in self.attributes:
            if attribute.study_id == study_id and attribute.clinical_attribute_id == clinical_attribute_id:
                return attribute
        raise ClinicalAttributeNotFoundError(study_id, clinical_attribute_id)

    def fetch_clinical_attributes(self, study_ids, projection):
        self._record('fetch_clinical_attributes', study_ids, projection)
        return [a for a in self.attributes if a.study_id in study_ids]

    def fetch_meta_clinical_attributes(self, study_ids):
        self._record('fetch_meta_clinical_attributes', study_ids)
        return ClinicalAttributeMeta(total_count=self.total_count)

    def get_all_clinical_attributes_in_studies_by_sample_list_id(
        self, sample_list_id, projection, sort_by, direction,
    ):
        self._record('by_sample_list_id', sample_list_id, projection, sort_by, direction)
        return [a.model_copy(update={'count': 3}) for a in self.attributes]

    def get_all_clinical_attributes_in_studies_by_sample_ids(
        self, study_ids, sample_ids, projection, sort_by, direction,
    ):
        self._record('by_sample_ids', study_ids, sample_ids, projection, sort_by, direction)
        return [a.model_copy(update={'count': len(sample_ids)}) for a in self.attributes]


class InMemoryPermissionLookup(StudyPermissionLookup):
    """One private study in the "team-a" collection, one study in the public "open" collection."""

    def __init__(self):
        self.collections = {
            'acc_tcga': None,
            'brca_tcga': 'open',
            'private_study': 'team-a',
        }
        self.public = ('open',)
        self.sample_lists = {
            'acc_tcga_all': 'acc_tcga',
            'private_study_all': 'private_study',
        }

    def get_study_collections(self, study_ids):
        return {s: self.collections[s] for s in study_ids if s in self.collections}

    def get_public_collections(self):
        return self.public

    def get_sample_list_study(self, sample_list_id):
        return self.sample_lists.get(sample_list_id)


@pytest.fixture
def service() -> RecordingClinicalAttributeService:
    return RecordingClinicalAttributeService()


@pytest.fixture
def permission_lookup() -> InMemoryPermissionLookup:
    return InMemoryPermissionLookup()


@pytest.fixture
def client(service, permission_lookup):
    app.dependency_overrides[get_clinical_attribute_service] = lambda: service
    app.dependency_overrides[get_access_guard] = lambda: StudyAccessGuard(permission_lookup)
    yield TestClient(app)
    app.dependency_overrides.clear()
