"""Data structures for ready exchange, related to clinical attribute metadata."""
from typing import Annotated

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import model_validator
from pydantic.alias_generators import to_camel

from cancerstudyportal.db.exchange_data_formats.parameters import PagingConstants

_camel_case = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CancerStudySummary(BaseModel):
    """Short description of the study that owns a clinical attribute."""
    model_config = _camel_case
    study_id: str
    name: str
    description: str
    type_of_cancer: str


class ClinicalAttribute(BaseModel):
    """
    A named metadata field describing a clinical property of a patient or a sample, in the
    context of a given study. The count is only provided when the attribute was looked up for a
    specific set of samples; it is the number of those samples having a value for the attribute.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            'examples': [
                {
                    'clinicalAttributeId': 'CANCER_TYPE',
                    'displayName': 'Cancer Type',
                    'description': 'Cancer type',
                    'datatype': 'STRING',
                    'patientAttribute': False,
                    'priority': '1',
                    'studyId': 'acc_tcga',
                },
            ]
        },
    )
    clinical_attribute_id: str
    display_name: str
    description: str
    datatype: str
    patient_attribute: bool
    priority: str
    study_id: str
    count: int | None = None
    study: CancerStudySummary | None = None


class ClinicalAttributeMeta(BaseModel):
    """The total number of clinical attributes satisfying a query."""
    total_count: int


class SampleIdentifier(BaseModel):
    """A sample, identified by its study and its identifier within that study."""
    model_config = _camel_case
    study_id: str
    sample_id: str


class SampleListScope(BaseModel):
    """A clinical attribute filter resolved to a server-stored sample list."""
    sample_list_id: str


class SampleIdentifiersScope(BaseModel):
    """A clinical attribute filter resolved to explicit samples, as index-aligned sequences."""
    study_ids: list[str]
    sample_ids: list[str]


SampleIdentifierList = Annotated[
    list[SampleIdentifier],
    Field(min_length=1, max_length=PagingConstants.MAX_PAGE_SIZE),
]


class ClinicalAttributeFilter(BaseModel):
    """List of sample identifiers, or a sample list identifier. If the sample list identifier is
    given, the list of sample identifiers is ignored."""
    model_config = _camel_case
    sample_list_id: str | None = None
    sample_identifiers: SampleIdentifierList | None = None

    @model_validator(mode='after')
    def either_sample_list_or_samples(self) -> 'ClinicalAttributeFilter':
        if self.sample_list_id is None and self.sample_identifiers is None:
            raise ValueError('Either sampleListId or sampleIdentifiers must be supplied.')
        return self

    def scope(self) -> SampleListScope | SampleIdentifiersScope:
        if self.sample_list_id is not None:
            return SampleListScope(sample_list_id=self.sample_list_id)
        identifiers = self.sample_identifiers if self.sample_identifiers is not None else []
        return SampleIdentifiersScope(
            study_ids=[identifier.study_id for identifier in identifiers],
            sample_ids=[identifier.sample_id for identifier in identifiers],
        )

    def ignores_sample_identifiers(self) -> bool:
        return self.sample_list_id is not None and self.sample_identifiers is not None
