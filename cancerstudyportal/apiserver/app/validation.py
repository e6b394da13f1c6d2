"""Strict query parameter validation."""
from typing import Annotated

from fastapi import Body
from fastapi import Path
from fastapi import Query
from fastapi.exceptions import RequestValidationError

from cancerstudyportal.db.exchange_data_formats.clinical_attributes import ClinicalAttributeFilter
from cancerstudyportal.db.exchange_data_formats.parameters import (
    ClinicalAttributeSortBy,
    Direction,
    PagingConstants,
    Projection,
)


def abbreviate_string(string: str) -> str:
    abbreviation = string[0:40]
    if len(string) > 40:
        abbreviation = abbreviation + '...'
    return abbreviation


def describe_validation_error(error: RequestValidationError) -> str:
    """A readable summary of each failed constraint, suitable for a client error message."""
    descriptions = []
    for detail in error.errors():
        location = '.'.join(str(part) for part in detail.get('loc', ()))
        descriptions.append(f'{location}: {abbreviate_string(str(detail.get("msg", "")))}')
    return '; '.join(descriptions)


ValidStudyId = Annotated[
    str,
    Path(min_length=1, max_length=255, description='Study ID e.g. acc_tcga'),
]
ValidClinicalAttributeId = Annotated[
    str,
    Path(min_length=1, max_length=255, description='Clinical Attribute ID e.g. CANCER_TYPE'),
]
ValidProjection = Annotated[Projection, Query(description='Level of detail of the response')]
ValidPageSize = Annotated[
    int,
    Query(
        alias='pageSize',
        ge=PagingConstants.MIN_PAGE_SIZE,
        le=PagingConstants.MAX_PAGE_SIZE,
        description='Page size of the result list',
    ),
]
ValidPageNumber = Annotated[
    int,
    Query(
        alias='pageNumber',
        ge=PagingConstants.MIN_PAGE_NUMBER,
        le=PagingConstants.MAX_PAGE_NUMBER,
        description='Page number of the result list',
    ),
]
ValidSortBy = Annotated[
    ClinicalAttributeSortBy | None,
    Query(alias='sortBy', description='Name of the property that the result list is sorted by'),
]
ValidDirection = Annotated[Direction, Query(description='Direction of the sort')]
ValidStudyIdList = Annotated[
    list[str],
    Body(
        min_length=1,
        max_length=PagingConstants.MAX_PAGE_SIZE,
        description='List of Study IDs',
        examples=[['acc_tcga', 'brca_tcga']],
    ),
]
ValidClinicalAttributeFilter = Annotated[
    ClinicalAttributeFilter,
    Body(description='List of SampleIdentifiers or Sample List ID'),
]
