"""Errors signalling that a requested study or clinical attribute does not exist."""


class StudyNotFoundError(ValueError):
    study_id: str

    def __init__(self, study_id: str):
        self.study_id = study_id
        super().__init__(self.verbalize())

    def verbalize(self) -> str:
        return f'Study not found: "{self.study_id}"'


class ClinicalAttributeNotFoundError(ValueError):
    study_id: str
    clinical_attribute_id: str

    def __init__(self, study_id: str, clinical_attribute_id: str):
        self.study_id = study_id
        self.clinical_attribute_id = clinical_attribute_id
        super().__init__(self.verbalize())

    def verbalize(self) -> str:
        return (
            f'Clinical attribute not found in study "{self.study_id}": '
            f'"{self.clinical_attribute_id}"'
        )
