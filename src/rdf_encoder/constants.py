"""
Shared constants for the RDF encoder.

Holds the well-known vocabulary IRIs, the supported language codes for
multilingual text, and traversal limits.
"""

from enum import Enum
from typing import Union

from rdflib import RDF

from .errors import UnknownLanguageCode

RDF_TYPE = str(RDF.type)

# Records nested deeper than this are rejected to guard against runaway input
DEFAULT_MAX_DEPTH = 64


class IsoCode(Enum):
    """Language codes accepted as keys of multilingual text."""
    DE = "de"  # German
    EN = "en"  # English
    FR = "fr"  # French
    IT = "it"  # Italian
    ES = "es"  # Spanish
    PT = "pt"  # Portuguese
    NL = "nl"  # Dutch
    PL = "pl"  # Polish
    RU = "ru"  # Russian
    JA = "ja"  # Japanese
    ZH = "zh"  # Chinese
    AR = "ar"  # Arabic
    FA = "fa"  # Persian

    @property
    def tag(self) -> str:
        """Lowercase two-letter language tag."""
        return self.value

    @classmethod
    def parse(cls, code: Union["IsoCode", str]) -> "IsoCode":
        """
        Resolve a language code to an IsoCode member.

        Args:
            code: An IsoCode member or a two-letter code in any case

        Returns:
            The matching IsoCode

        Raises:
            UnknownLanguageCode: If the code is not supported
        """
        if isinstance(code, cls):
            return code
        if isinstance(code, str):
            try:
                return cls(code.strip().lower())
            except ValueError:
                pass
        raise UnknownLanguageCode(code)
