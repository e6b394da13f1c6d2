"""Accessors of clinical attribute metadata, optionally with counts over a set of samples."""

from psycopg import sql

from cancerstudyportal.db.database_connection import SimpleReadOnlyProvider
from cancerstudyportal.db.simple_query_patterns import GetSingleResult
from cancerstudyportal.db.exchange_data_formats.clinical_attributes import (
    CancerStudySummary,
    ClinicalAttribute,
)
from cancerstudyportal.db.exchange_data_formats.parameters import (
    ClinicalAttributeSortBy,
    Direction,
    Projection,
)
from cancerstudyportal.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger(__name__)

SUMMARY_COLUMNS = '''
    cam.attr_id AS attr_id,
    cam.display_name AS display_name,
    cam.description AS description,
    cam.datatype AS datatype,
    cam.patient_attribute AS patient_attribute,
    cam.priority AS priority,
    cs.cancer_study_identifier AS cancer_study_identifier
'''

DETAILED_COLUMNS = SUMMARY_COLUMNS + ''',
    cs.name AS study_name,
    cs.description AS study_description,
    cs.type_of_cancer AS study_type_of_cancer
'''

ATTRIBUTES_SOURCE = '''
FROM clinical_attribute_meta cam
JOIN cancer_study cs ON cs.cancer_study_id=cam.cancer_study_id
'''

DEFAULT_ORDER = 'cs.cancer_study_identifier, cam.attr_id'

SAMPLES_BY_IDENTIFIERS = '''
SELECT s.internal_id AS sample_internal_id, s.patient_id AS patient_internal_id, p.cancer_study_id
FROM sample s
JOIN patient p ON p.internal_id=s.patient_id
JOIN cancer_study cs ON cs.cancer_study_id=p.cancer_study_id
JOIN unnest(%s::text[], %s::text[]) AS requested(study, sample)
    ON requested.study=cs.cancer_study_identifier AND requested.sample=s.stable_id
'''

SAMPLES_BY_SAMPLE_LIST = '''
SELECT s.internal_id AS sample_internal_id, s.patient_id AS patient_internal_id, p.cancer_study_id
FROM sample_list sl
JOIN sample_list_list sll ON sll.list_id=sl.list_id
JOIN sample s ON s.internal_id=sll.sample_id
JOIN patient p ON p.internal_id=s.patient_id
WHERE sl.stable_id=%s
'''

COUNTS_TEMPLATE = '''
WITH selected_samples AS ({samples}),
counts AS (
    SELECT ss.cancer_study_id, c.attr_id, FALSE AS patient_attribute,
        COUNT(DISTINCT ss.sample_internal_id) AS count
    FROM selected_samples ss
    JOIN clinical_sample c ON c.internal_id=ss.sample_internal_id
    GROUP BY ss.cancer_study_id, c.attr_id
    UNION ALL
    SELECT ss.cancer_study_id, c.attr_id, TRUE AS patient_attribute,
        COUNT(DISTINCT ss.sample_internal_id) AS count
    FROM selected_samples ss
    JOIN clinical_patient c ON c.internal_id=ss.patient_internal_id
    GROUP BY ss.cancer_study_id, c.attr_id
)
SELECT {columns}, counts.count AS count
FROM counts
JOIN clinical_attribute_meta cam
    ON cam.cancer_study_id=counts.cancer_study_id
    AND cam.attr_id=counts.attr_id
    AND cam.patient_attribute=counts.patient_attribute
JOIN cancer_study cs ON cs.cancer_study_id=cam.cancer_study_id
WHERE counts.count > 0
'''


class ClinicalAttributesAccess(SimpleReadOnlyProvider):
    """Provide clinical attribute metadata, as a whole or restricted to studies or samples."""

    def get_all(
        self,
        projection: Projection,
        page_size: int | None = None,
        page_number: int | None = None,
        sort_by: ClinicalAttributeSortBy | None = None,
        direction: Direction = Direction.ASC,
    ) -> list[ClinicalAttribute]:
        query = self._select(projection) + self._order(sort_by, direction)
        query, parameters = self._paginate(query, (), page_size, page_number)
        return self._fetch(query, parameters, projection)

    def get_all_in_studies(
        self,
        study_ids: list[str],
        projection: Projection,
        page_size: int | None = None,
        page_number: int | None = None,
        sort_by: ClinicalAttributeSortBy | None = None,
        direction: Direction = Direction.ASC,
    ) -> list[ClinicalAttribute]:
        query = (
            self._select(projection)
            + sql.SQL(' WHERE cs.cancer_study_identifier = ANY(%s)')
            + self._order(sort_by, direction)
        )
        query, parameters = self._paginate(query, (list(study_ids),), page_size, page_number)
        return self._fetch(query, parameters, projection)

    def get_one(self, study_id: str, clinical_attribute_id: str) -> ClinicalAttribute | None:
        query = self._select(Projection.SUMMARY) + sql.SQL(
            ' WHERE cs.cancer_study_identifier=%s AND cam.attr_id=%s'
        )
        attributes = self._fetch(query, (study_id, clinical_attribute_id), Projection.SUMMARY)
        if len(attributes) == 0:
            return None
        return attributes[0]

    def count_all(self) -> int:
        return GetSingleResult.integer(
            self.cursor,
            query='SELECT COUNT(*) FROM clinical_attribute_meta ;',
        )

    def count_in_studies(self, study_ids: list[str]) -> int:
        return GetSingleResult.integer(
            self.cursor,
            query='''
            SELECT COUNT(*)
            FROM clinical_attribute_meta cam
            JOIN cancer_study cs ON cs.cancer_study_id=cam.cancer_study_id
            WHERE cs.cancer_study_identifier = ANY(%s)
            ;
            ''',
            parameters=(list(study_ids),),
        )

    def get_counted_by_sample_ids(
        self,
        study_ids: list[str],
        sample_ids: list[str],
        projection: Projection,
        sort_by: ClinicalAttributeSortBy | None = None,
        direction: Direction = Direction.ASC,
    ) -> list[ClinicalAttribute]:
        query = self._counts_query(SAMPLES_BY_IDENTIFIERS, projection, sort_by, direction)
        return self._fetch(query, (list(study_ids), list(sample_ids)), projection, counted=True)

    def get_counted_by_sample_list(
        self,
        sample_list_id: str,
        projection: Projection,
        sort_by: ClinicalAttributeSortBy | None = None,
        direction: Direction = Direction.ASC,
    ) -> list[ClinicalAttribute]:
        query = self._counts_query(SAMPLES_BY_SAMPLE_LIST, projection, sort_by, direction)
        return self._fetch(query, (sample_list_id,), projection, counted=True)

    def _counts_query(
        self,
        samples: str,
        projection: Projection,
        sort_by: ClinicalAttributeSortBy | None,
        direction: Direction,
    ) -> sql.Composed:
        template = sql.SQL(COUNTS_TEMPLATE).format(
            samples=sql.SQL(samples),
            columns=sql.SQL(self._columns(projection)),
        )
        return template + self._order(sort_by, direction)

    @staticmethod
    def _columns(projection: Projection) -> str:
        match projection:
            case Projection.DETAILED:
                return DETAILED_COLUMNS
            case Projection.SUMMARY | Projection.META:
                return SUMMARY_COLUMNS
        raise ValueError(f'Unsupported projection: {projection}')

    def _select(self, projection: Projection) -> sql.Composed:
        return sql.SQL('SELECT ') + sql.SQL(self._columns(projection)) + sql.SQL(ATTRIBUTES_SOURCE)

    @staticmethod
    def _order(sort_by: ClinicalAttributeSortBy | None, direction: Direction) -> sql.Composed:
        if sort_by is None:
            return sql.SQL(' ORDER BY ') + sql.SQL(DEFAULT_ORDER)
        match direction:
            case Direction.ASC:
                keyword = sql.SQL('ASC')
            case Direction.DESC:
                keyword = sql.SQL('DESC')
        return sql.SQL(' ORDER BY {column} {direction}, {tiebreak}').format(
            column=sql.Identifier(sort_by.original_value),
            direction=keyword,
            tiebreak=sql.SQL(DEFAULT_ORDER),
        )

    @staticmethod
    def _paginate(
        query: sql.Composed,
        parameters: tuple,
        page_size: int | None,
        page_number: int | None,
    ) -> tuple[sql.Composed, tuple]:
        if page_size is None:
            return query, parameters
        offset = page_size * (page_number if page_number is not None else 0)
        return query + sql.SQL(' LIMIT %s OFFSET %s'), parameters + (page_size, offset)

    def _fetch(
        self,
        query: sql.Composed,
        parameters: tuple,
        projection: Projection,
        counted: bool = False,
    ) -> list[ClinicalAttribute]:
        self.cursor.execute(query, parameters)
        rows = self.cursor.fetchall()
        logger.debug('Retrieved %s clinical attributes.', len(rows))
        return [self._create_attribute(row, projection, counted) for row in rows]

    @staticmethod
    def _create_attribute(row: tuple, projection: Projection, counted: bool) -> ClinicalAttribute:
        attr_id, display_name, description, datatype, patient_attribute, priority, study_id = row[0:7]
        study = None
        if projection == Projection.DETAILED:
            study_name, study_description, type_of_cancer = row[7:10]
            study = CancerStudySummary(
                study_id=study_id,
                name=study_name,
                description=study_description,
                type_of_cancer=type_of_cancer,
            )
        return ClinicalAttribute(
            clinical_attribute_id=attr_id,
            display_name=display_name,
            description=description,
            datatype=datatype,
            patient_attribute=bool(patient_attribute),
            priority=str(priority),
            study_id=study_id,
            count=int(row[-1]) if counted else None,
            study=study,
        )
