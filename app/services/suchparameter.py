"""Vocabulary of the auto search: parameter names, tag flags and enum values."""

from typing import Dict, Mapping, Tuple

from models.auto import Autoart

# Query parameters are passed around as a flat name -> string mapping
Suchparameter = Mapping[str, str]

# Parameters compared against a column. "lieferbar" and "datum" are aliases.
SUCHPARAMETER_NAMEN: Tuple[str, ...] = (
    "identifikationsNummer",
    "fin",
    "rating",
    "preis",
    "art",
    "verfuegbar",
    "lieferbar",
    "baujahr",
    "datum",
    "homepage",
)

# Boolean flags mapped 1:1 to the keyword required in "schlagwoerter"
SCHLAGWORT_FLAGS: Dict[str, str] = {
    "allrad": "ALLRAD",
    "benzin": "BENZIN",
    "budget": "BUDGET",
    "business": "BUSINESS",
    "cabrio": "CABRIO",
    "e_auto": "E-AUTO",
    "einfach": "EINFACH",
    "familie": "FAMILIE",
    "hybrid": "HYBRID",
    "komfort": "KOMFORT",
    "kombi": "KOMBI",
    "nutzfahrzeug": "NUTZFAHRZEUG",
    "pickup": "PICKUP",
    "reichweite": "REICHWEITE",
    "sparsam": "SPARSAM",
    "sport": "SPORT",
    "suv": "SUV",
    "tech": "TECH",
    "vier_x_vier": "4x4",
}

GUELTIGE_NAMEN = frozenset(SUCHPARAMETER_NAMEN) | frozenset(SCHLAGWORT_FLAGS)

AUTOARTEN = frozenset(art.value for art in Autoart)


def is_true(value) -> bool:
    """'true' in any letter case is true, everything else is false."""
    return str(value).lower() == "true"
