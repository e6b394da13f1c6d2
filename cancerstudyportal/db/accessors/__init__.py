"""Convenience classes for accessing various data in the database."""

from cancerstudyportal.db.accessors.clinical_attributes import ClinicalAttributesAccess
from cancerstudyportal.db.accessors.study import StudyAccess
