"""Convenience accessors of study-related small data / metadata."""

from cancerstudyportal.db.database_connection import SimpleReadOnlyProvider
from cancerstudyportal.db.simple_query_patterns import GetSingleResult


class StudyAccess(SimpleReadOnlyProvider):
    """Provide study-related metadata."""

    def study_exists(self, study_id: str) -> bool:
        count = GetSingleResult.integer(
            self.cursor,
            query='SELECT COUNT(*) FROM cancer_study WHERE cancer_study_identifier=%s ;',
            parameters=(study_id,),
        )
        return count > 0

    def get_study_specifiers(self) -> tuple[str, ...]:
        self.cursor.execute('SELECT cancer_study_identifier FROM cancer_study ;')
        rows = self.cursor.fetchall()
        return tuple(sorted(str(row[0]) for row in rows))

    def get_study_collections(self, study_ids: list[str]) -> dict[str, str | None]:
        """The collection tag of each of the given studies that exists. Untagged studies map to
        None."""
        self.cursor.execute('''
        SELECT cancer_study_identifier, collection
        FROM cancer_study
        WHERE cancer_study_identifier = ANY(%s)
        ;
        ''', (list(study_ids),))
        return {str(study): collection for study, collection in self.cursor.fetchall()}

    def get_collection_whitelist(self) -> tuple[str, ...]:
        self.cursor.execute('SELECT collection FROM collection_whitelist ;')
        return tuple(map(lambda row: row[0], self.cursor.fetchall()))

    def get_sample_list_study(self, sample_list_id: str) -> str | None:
        return GetSingleResult.string(
            self.cursor,
            query='''
            SELECT cs.cancer_study_identifier
            FROM sample_list sl
            JOIN cancer_study cs ON cs.cancer_study_id=sl.cancer_study_id
            WHERE sl.stable_id=%s
            ;
            ''',
            parameters=(sample_list_id,),
            or_else_value=None,
        )
