"""Request parameter vocabularies shared by the API server and the query layer."""
from enum import Enum


class Projection(str, Enum):
    """Level of detail of the response."""
    SUMMARY = 'SUMMARY'
    DETAILED = 'DETAILED'
    META = 'META'


class Direction(str, Enum):
    """Direction of the sort."""
    ASC = 'ASC'
    DESC = 'DESC'


class ClinicalAttributeSortBy(str, Enum):
    """Name of the property that a clinical attribute result list is sorted by."""
    CLINICAL_ATTRIBUTE_ID = 'clinicalAttributeId'
    DISPLAY_NAME = 'displayName'
    DESCRIPTION = 'description'
    DATATYPE = 'datatype'
    PATIENT_ATTRIBUTE = 'patientAttribute'
    PRIORITY = 'priority'
    STUDY_ID = 'studyId'

    @property
    def original_value(self) -> str:
        """The column of the clinical attribute query that this property is read from."""
        return _SORT_COLUMNS[self]


_SORT_COLUMNS = {
    ClinicalAttributeSortBy.CLINICAL_ATTRIBUTE_ID: 'attr_id',
    ClinicalAttributeSortBy.DISPLAY_NAME: 'display_name',
    ClinicalAttributeSortBy.DESCRIPTION: 'description',
    ClinicalAttributeSortBy.DATATYPE: 'datatype',
    ClinicalAttributeSortBy.PATIENT_ATTRIBUTE: 'patient_attribute',
    ClinicalAttributeSortBy.PRIORITY: 'priority',
    ClinicalAttributeSortBy.STUDY_ID: 'cancer_study_identifier',
}


class PagingConstants:
    MIN_PAGE_SIZE = 1
    MAX_PAGE_SIZE = 10000000
    DEFAULT_PAGE_SIZE = 10000000
    MIN_PAGE_NUMBER = 0
    MAX_PAGE_NUMBER = 2147483647
    DEFAULT_PAGE_NUMBER = 0


class HeaderKeyConstants:
    TOTAL_COUNT = 'total-count'
