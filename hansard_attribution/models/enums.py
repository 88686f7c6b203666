"""Enumeration types for the attribution models."""

from enum import Enum


class HeaderForm(str, Enum):
    """Textual forms a speaker header can take in a Hansard transcript."""

    NAME_BRACKET_CONSTITUENCY = "name_bracket_constituency"  # Name [Constituency]:
    TITLE_NAME_PAREN_CONSTITUENCY = "title_name_paren_constituency"  # Tuan Name (Constituency):
    BRACKETED_PAIR = "bracketed_pair"  # [A - B]:
    NAME_PAREN_CONSTITUENCY = "name_paren_constituency"  # Name (Constituency):
    TITLE_NAME = "title_name"  # Menteri Name:

    @property
    def priority(self) -> int:
        """Trust rank of the form, 1 being the most trusted."""
        return _FORM_PRIORITIES[self]


_FORM_PRIORITIES = {
    HeaderForm.NAME_BRACKET_CONSTITUENCY: 1,
    HeaderForm.TITLE_NAME_PAREN_CONSTITUENCY: 2,
    HeaderForm.BRACKETED_PAIR: 3,
    HeaderForm.NAME_PAREN_CONSTITUENCY: 4,
    HeaderForm.TITLE_NAME: 5,
}


class FailureReason(str, Enum):
    """Why a header could not be attributed to a legislator."""

    CONSTITUENCY_NOT_RECOGNIZED = "constituency not recognized"
    CONSTITUENCY_NAME_MISMATCH = "constituency matched but name mismatch"
    NAME_NOT_FOUND = "no constituency provided and name not found"
