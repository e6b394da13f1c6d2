"""The sample-scope filter model and the camelCase wire format of clinical attributes."""
import pytest
from pydantic import ValidationError

from cancerstudyportal.db.exchange_data_formats.clinical_attributes import (
    ClinicalAttribute,
    ClinicalAttributeFilter,
    SampleIdentifiersScope,
    SampleListScope,
)


def test_sample_list_scope():
    clinical_attribute_filter = ClinicalAttributeFilter.model_validate({'sampleListId': 'acc_tcga_all'})
    assert clinical_attribute_filter.scope() == SampleListScope(sample_list_id='acc_tcga_all')
    assert not clinical_attribute_filter.ignores_sample_identifiers()


def test_sample_identifiers_scope_keeps_order():
    clinical_attribute_filter = ClinicalAttributeFilter.model_validate({
        'sampleIdentifiers': [
            {'studyId': 'brca_tcga', 'sampleId': 's2'},
            {'studyId': 'acc_tcga', 'sampleId': 's1'},
        ],
    })
    assert clinical_attribute_filter.scope() == SampleIdentifiersScope(
        study_ids=['brca_tcga', 'acc_tcga'],
        sample_ids=['s2', 's1'],
    )


def test_sample_list_wins_over_identifiers():
    clinical_attribute_filter = ClinicalAttributeFilter.model_validate({
        'sampleListId': 'acc_tcga_all',
        'sampleIdentifiers': [{'studyId': 'acc_tcga', 'sampleId': 's1'}],
    })
    assert isinstance(clinical_attribute_filter.scope(), SampleListScope)
    assert clinical_attribute_filter.ignores_sample_identifiers()


@pytest.mark.parametrize('body', [
    {},
    {'sampleListId': None, 'sampleIdentifiers': None},
    {'sampleIdentifiers': []},
    {'sampleIdentifiers': [{'sampleId': 's1'}]},
])
def test_invalid_filters(body):
    with pytest.raises(ValidationError):
        ClinicalAttributeFilter.model_validate(body)


def test_attribute_serializes_camel_case():
    attribute = ClinicalAttribute(
        clinical_attribute_id='OS_STATUS',
        display_name='Overall Survival Status',
        description='Overall patient survival status.',
        datatype='STRING',
        patient_attribute=True,
        priority='1',
        study_id='acc_tcga',
        count=4,
    )
    serialized = attribute.model_dump(by_alias=True, exclude_none=True)
    assert serialized['clinicalAttributeId'] == 'OS_STATUS'
    assert serialized['patientAttribute'] is True
    assert serialized['count'] == 4
    assert 'study' not in serialized
