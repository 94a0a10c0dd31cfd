"""Closed enumerations used by applicant records.

The members are pure data: each carries the code expected by BBS-Planung.
Mapping form codes to members is configuration (``code_tables`` in
``config/extraction.json``) and happens in the extraction pipeline.
"""

from __future__ import annotations

from enum import Enum

__all__ = ["Degree", "Religion", "School"]


class Religion(Enum):
    """Denomination with its numeric BBS-Planung code."""

    OHNE_ANGABE = 0
    EVANGELISCH = 1
    KATHOLISCH = 3
    ALEVITISCH = 5
    ISLAMISCH = 6
    SONSTIGE = 7
    KEINE = 8

    @property
    def code(self) -> int:
        """Numeric code written to the ``KONF`` column."""
        return self.value

    @classmethod
    def from_code(cls, code: int) -> Religion:
        """Return the member with the given numeric code.

        Raises
        ------
        ValueError
            If no member carries ``code``.
        """
        return cls(code)

    @classmethod
    def from_name(cls, text: str) -> Religion | None:
        """Match a free-text denomination against member names.

        Comparison is case-insensitive on the trimmed input. Returns ``None``
        when nothing matches.
        """
        wanted = text.strip().casefold()
        for member in cls:
            if member.name.casefold() == wanted:
                return member
        return None


class Degree(Enum):
    """School-leaving qualification with its two-letter BBS-Planung id."""

    OHNE_ABSCHLUSS = "OA"
    HAUPTSCHULABSCHLUSS = "HA"
    SEKUNDAR_I_HAUPTSCHULE = "HK"
    SEKUNDAR_I_REALSCHULE = "SI"
    ERWEITERTER_SEKUNDAR_I = "EI"
    FACHHOCHSCHULREIFE = "FH"
    FACHGEBUNDENE_HOCHSCHULREIFE = "GH"
    SCHULISCHER_TEIL_DER_FACHHOCHSCHULREIFE = "FT"
    ALLGEMEINE_HOCHSCHULREIFE = "AH"
    ABSCHLUSS_DER_FOERDERSCHULE = "AL"
    SONSTIGER_AUSLAENDISCHER_ABSCHLUSS = "XA"
    SONSTIGER_ABSCHLUSS = "XS"

    @property
    def code(self) -> str:
        """Short id written to the ``ABSCHLUSS`` column."""
        return self.value


class School(Enum):
    """School type previously attended, with its two-letter BBS-Planung id."""

    BERUFSEINSTIEGSKLASSE = "BE"
    BERUFSSCHULE = "BS"
    KOOPERATIVES_BERUFSGRUNDBILDUNGSJAHR = "BK"
    SCHULISCHES_BERUFSGRUNDBILDUNGSJAHR = "BG"
    BERUFSOBERSCHULE = "BO"
    BERUFSVORBEREITUNGSJAHR = "BV"
    BERUFSVORBEREITUNGSJAHR_FUER_AUSLAENDER = "BR"
    BERUFSFACHSCHULE_EINJAEHRIG = "B1"
    BERUFSFACHSCHULE_EINJAEHRIG_RS = "B2"
    BERUFSFACHSCHULE_EINEINHALBJAEHRIG = "B4"
    BERUFSFACHSCHULE_ZWEIJAEHRIG = "B7"
    BERUFSFACHSCHULE_ZWEIJAEHRIG_RS = "B8"
    FACHSCHULE_EINJAEHRIG = "F1"
    FACHSCHULE_ZWEIJAEHRIG = "F2"
    FACHSCHULE_SEEFAHRT = "F4"
    FACHOBERSCHULE = "FO"
    FACHGYMNASIUM = "FG"
    FACHHOCHSCHULE = "FA"
    FREIE_WALDORFSCHULE = "FW"
    GYMNASIUM_BIS_KLASSE_9 = "G1"
    GYMNASIUM_BIS_KLASSE_10 = "G2"
    GYMNASIUM_OBERSTUFE = "GY"
    HOCHSCHULE = "HO"
    HAUPTSCHULE = "HS"
    GESAMTSCHULE = "IG"
    REALSCHULE = "RS"
    FOERDERSCHULE = "SA"
    FOERDERSCHULE_SCHWERPUNKT_LERNEN = "SL"
    SCHULE_IN_NEUEN_BUNDESLAENDERN = "XD"
    OBERSCHULE = "OS"
    SONSTIGES = "XS"

    @property
    def code(self) -> str:
        """Short id written to the ``HERKUNFT`` column."""
        return self.value
