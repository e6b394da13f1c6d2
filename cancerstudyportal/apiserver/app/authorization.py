"""Read-permission checks on studies, consulted before any study-scoped lookup.

Studies optionally belong to a collection. A study is readable if it has no collection, if its
collection is whitelisted as public, or if the caller presents the collection's token.
"""
from abc import ABC
from abc import abstractmethod
from typing import Annotated

from attr import define
from fastapi import Query

from cancerstudyportal.db.database_connection import DBCursor
from cancerstudyportal.db.accessors import StudyAccess
from cancerstudyportal.db.exchange_data_formats.clinical_attributes import (
    ClinicalAttributeFilter,
    SampleListScope,
    SampleIdentifiersScope,
)
from cancerstudyportal.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger(__name__)

COLLECTION_TAG_PATTERN = r'[a-z0-9\-]{1,513}'


class StudyAccessDeniedError(ValueError):
    study_ids: tuple[str, ...]

    def __init__(self, study_ids: tuple[str, ...]):
        self.study_ids = study_ids
        super().__init__(self.verbalize())

    def verbalize(self) -> str:
        return f'Access to the requested studies is denied: {", ".join(self.study_ids)}'


@define(frozen=True)
class CallerContext:
    """What the caller presented in order to be granted access."""
    collection: str | None = None


def caller_context(
    collection: Annotated[
        str | None,
        Query(pattern=f'^{COLLECTION_TAG_PATTERN}$', examples=['abcdef']),
    ] = None,
) -> CallerContext:
    """The collection parameter is a token providing access to private studies, so it is not
    required."""
    return CallerContext(collection=collection)


class StudyPermissionLookup(ABC):
    """Source of the facts that read permissions are decided on."""

    @abstractmethod
    def get_study_collections(self, study_ids: list[str]) -> dict[str, str | None]:
        pass

    @abstractmethod
    def get_public_collections(self) -> tuple[str, ...]:
        pass

    @abstractmethod
    def get_sample_list_study(self, sample_list_id: str) -> str | None:
        pass


class DatabaseStudyPermissionLookup(StudyPermissionLookup):
    """Permission facts read from the cancer_study, collection_whitelist and sample_list tables."""

    def __init__(self, database_config_file: str | None = None):
        self.database_config_file = database_config_file

    def get_study_collections(self, study_ids):
        with DBCursor(database_config_file=self.database_config_file) as cursor:
            return StudyAccess(cursor).get_study_collections(study_ids)

    def get_public_collections(self):
        with DBCursor(database_config_file=self.database_config_file) as cursor:
            return StudyAccess(cursor).get_collection_whitelist()

    def get_sample_list_study(self, sample_list_id):
        with DBCursor(database_config_file=self.database_config_file) as cursor:
            return StudyAccess(cursor).get_sample_list_study(sample_list_id)


class StudyAccessGuard:
    """Decides whether a caller may read a set of studies."""
    lookup: StudyPermissionLookup

    def __init__(self, lookup: StudyPermissionLookup):
        self.lookup = lookup

    def is_readable(self, study_ids: list[str], caller: CallerContext) -> bool:
        collections = self.lookup.get_study_collections(sorted(set(study_ids)))
        tagged = {study: tag for study, tag in collections.items() if tag is not None}
        if len(tagged) == 0:
            return True
        public = set(self.lookup.get_public_collections())
        denied = [
            study for study, tag in tagged.items()
            if tag not in public and tag != caller.collection
        ]
        if len(denied) > 0:
            logger.info('Denied read access to: %s', denied)
            return False
        return True

    def studies_of_filter(self, clinical_attribute_filter: ClinicalAttributeFilter) -> list[str]:
        match clinical_attribute_filter.scope():
            case SampleListScope(sample_list_id=sample_list_id):
                study = self.lookup.get_sample_list_study(sample_list_id)
                return [] if study is None else [study]
            case SampleIdentifiersScope(study_ids=study_ids):
                return sorted(set(study_ids))
        raise ValueError('Unrecognized clinical attribute filter scope.')


def require_read_permission(
    guard: StudyAccessGuard,
    study_ids: list[str],
    caller: CallerContext,
) -> None:
    if not guard.is_readable(study_ids, caller):
        raise StudyAccessDeniedError(tuple(sorted(set(study_ids))))


def get_access_guard() -> StudyAccessGuard:
    return StudyAccessGuard(DatabaseStudyPermissionLookup())
