"""The clinical attribute service: the lookups behind the API server's endpoints."""
from abc import ABC
from abc import abstractmethod

from cancerstudyportal.db.database_connection import DBCursor
from cancerstudyportal.db.accessors import ClinicalAttributesAccess
from cancerstudyportal.db.accessors import StudyAccess
from cancerstudyportal.db.exceptions import StudyNotFoundError
from cancerstudyportal.db.exceptions import ClinicalAttributeNotFoundError
from cancerstudyportal.db.exchange_data_formats.clinical_attributes import (
    ClinicalAttribute,
    ClinicalAttributeMeta,
)
from cancerstudyportal.db.exchange_data_formats.parameters import (
    ClinicalAttributeSortBy,
    Direction,
    Projection,
)
from cancerstudyportal.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger(__name__)


class ClinicalAttributeService(ABC):
    """Lookups, pagination, filtering and counting of clinical attributes.

    Implementations raise StudyNotFoundError or ClinicalAttributeNotFoundError when a requested
    study or attribute does not exist.
    """

    @abstractmethod
    def get_all_clinical_attributes(
        self,
        projection: Projection,
        page_size: int,
        page_number: int,
        sort_by: ClinicalAttributeSortBy | None,
        direction: Direction,
    ) -> list[ClinicalAttribute]:
        pass

    @abstractmethod
    def get_meta_clinical_attributes(self) -> ClinicalAttributeMeta:
        pass

    @abstractmethod
    def get_all_clinical_attributes_in_study(
        self,
        study_id: str,
        projection: Projection,
        page_size: int,
        page_number: int,
        sort_by: ClinicalAttributeSortBy | None,
        direction: Direction,
    ) -> list[ClinicalAttribute]:
        pass

    @abstractmethod
    def get_meta_clinical_attributes_in_study(self, study_id: str) -> ClinicalAttributeMeta:
        pass

    @abstractmethod
    def get_clinical_attribute(self, study_id: str, clinical_attribute_id: str) -> ClinicalAttribute:
        pass

    @abstractmethod
    def fetch_clinical_attributes(
        self,
        study_ids: list[str],
        projection: Projection,
    ) -> list[ClinicalAttribute]:
        pass

    @abstractmethod
    def fetch_meta_clinical_attributes(self, study_ids: list[str]) -> ClinicalAttributeMeta:
        pass

    @abstractmethod
    def get_all_clinical_attributes_in_studies_by_sample_list_id(
        self,
        sample_list_id: str,
        projection: Projection,
        sort_by: ClinicalAttributeSortBy | None,
        direction: Direction,
    ) -> list[ClinicalAttribute]:
        pass

    @abstractmethod
    def get_all_clinical_attributes_in_studies_by_sample_ids(
        self,
        study_ids: list[str],
        sample_ids: list[str],
        projection: Projection,
        sort_by: ClinicalAttributeSortBy | None,
        direction: Direction,
    ) -> list[ClinicalAttribute]:
        pass


class DatabaseClinicalAttributeService(ClinicalAttributeService):
    """Clinical attribute service backed by the Postgres clinical metadata schema. Each call uses
    its own short-lived connection."""
    database_config_file: str | None

    def __init__(self, database_config_file: str | None = None):
        self.database_config_file = database_config_file

    def _cursor(self) -> DBCursor:
        return DBCursor(database_config_file=self.database_config_file)

    def get_all_clinical_attributes(self, projection, page_size, page_number, sort_by, direction):
        with self._cursor() as cursor:
            return ClinicalAttributesAccess(cursor).get_all(
                projection, page_size, page_number, sort_by, direction,
            )

    def get_meta_clinical_attributes(self):
        with self._cursor() as cursor:
            return ClinicalAttributeMeta(total_count=ClinicalAttributesAccess(cursor).count_all())

    def get_all_clinical_attributes_in_study(
        self, study_id, projection, page_size, page_number, sort_by, direction,
    ):
        with self._cursor() as cursor:
            self._check_study_exists(cursor, study_id)
            return ClinicalAttributesAccess(cursor).get_all_in_studies(
                [study_id], projection, page_size, page_number, sort_by, direction,
            )

    def get_meta_clinical_attributes_in_study(self, study_id):
        with self._cursor() as cursor:
            self._check_study_exists(cursor, study_id)
            count = ClinicalAttributesAccess(cursor).count_in_studies([study_id])
            return ClinicalAttributeMeta(total_count=count)

    def get_clinical_attribute(self, study_id, clinical_attribute_id):
        with self._cursor() as cursor:
            self._check_study_exists(cursor, study_id)
            attribute = ClinicalAttributesAccess(cursor).get_one(study_id, clinical_attribute_id)
        if attribute is None:
            raise ClinicalAttributeNotFoundError(study_id, clinical_attribute_id)
        return attribute

    def fetch_clinical_attributes(self, study_ids, projection):
        with self._cursor() as cursor:
            return ClinicalAttributesAccess(cursor).get_all_in_studies(study_ids, projection)

    def fetch_meta_clinical_attributes(self, study_ids):
        with self._cursor() as cursor:
            count = ClinicalAttributesAccess(cursor).count_in_studies(study_ids)
            return ClinicalAttributeMeta(total_count=count)

    def get_all_clinical_attributes_in_studies_by_sample_list_id(
        self, sample_list_id, projection, sort_by, direction,
    ):
        with self._cursor() as cursor:
            return ClinicalAttributesAccess(cursor).get_counted_by_sample_list(
                sample_list_id, projection, sort_by, direction,
            )

    def get_all_clinical_attributes_in_studies_by_sample_ids(
        self, study_ids, sample_ids, projection, sort_by, direction,
    ):
        if len(study_ids) != len(sample_ids):
            raise ValueError('Study and sample identifier lists must be index-aligned.')
        with self._cursor() as cursor:
            return ClinicalAttributesAccess(cursor).get_counted_by_sample_ids(
                study_ids, sample_ids, projection, sort_by, direction,
            )

    @staticmethod
    def _check_study_exists(cursor, study_id: str) -> None:
        if not StudyAccess(cursor).study_exists(study_id):
            logger.info('Requested study does not exist: "%s"', study_id)
            raise StudyNotFoundError(study_id)
