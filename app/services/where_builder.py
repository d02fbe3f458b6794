import logging
import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from sqlalchemy import ColumnElement

from models.auto import Auto
from models.fahrzeugschein import Fahrzeugschein
from services.suchparameter import SCHLAGWORT_FLAGS, Suchparameter, is_true

_INT_PREFIX = re.compile(r"\s*[+-]?\d+")
_DECIMAL_PREFIX = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_int(value: str) -> Optional[int]:
    """Leading integer of a string ("4abc" -> 4). None if there is none."""
    match = _INT_PREFIX.match(str(value))
    return int(match.group()) if match else None


def parse_decimal(value: str) -> Optional[Decimal]:
    """Leading decimal number of a string ("99.5 EUR" -> 99.5). None if there is none."""
    match = _DECIMAL_PREFIX.match(str(value))
    if not match:
        return None
    try:
        return Decimal(match.group().strip())
    except InvalidOperation:
        return None


def parse_date(value: str) -> Optional[date]:
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


class WhereBuilder:
    """
    Builds the WHERE clause for the flexible auto search.

    Example:
        {"identifikationsNummer": "WDB", "rating": "4", "preis": "35000", "suv": "true"}
    becomes
        EXISTS (fahrzeugschein ... identifikations_nummer ILIKE '%WDB%')
        AND rating >= 4
        AND preis <= 35000
        AND schlagwoerter @> ARRAY['SUV']

    Unknown parameter names are ignored here; rejecting them is the
    caller's job.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("auto.where_builder")

    def build(self, suchparameter: Suchparameter) -> List[ColumnElement[bool]]:
        """
        Returns the predicates for the given search parameters, to be used
        as select(Auto).where(*predicates). An empty list means no filter.
        """
        self.logger.debug("build: suchparameter=%s", dict(suchparameter))

        where: List[ColumnElement[bool]] = []

        for key, value in suchparameter.items():
            predicate = self._compare(key, value)
            if predicate is not None:
                where.append(predicate)

        schlagwoerter = self._build_schlagwoerter(suchparameter)
        if schlagwoerter:
            # superset check: every requested keyword must be present
            where.append(Auto.schlagwoerter.contains(schlagwoerter))

        self.logger.debug("build: %d predicate(s)", len(where))
        return where

    def _compare(self, key: str, value: str) -> Optional[ColumnElement[bool]]:
        if key == "identifikationsNummer":
            return Auto.fahrzeugschein.has(
                Fahrzeugschein.identifikations_nummer.icontains(str(value), autoescape=True)
            )
        if key == "fin":
            return Auto.fin == value
        if key == "rating":
            rating = parse_int(value)
            return Auto.rating >= rating if rating is not None else None
        if key == "preis":
            preis = parse_decimal(value)
            return Auto.preis <= preis if preis is not None else None
        if key == "art":
            return Auto.art == value
        if key in ("verfuegbar", "lieferbar"):
            return Auto.verfuegbar == is_true(value)
        if key in ("baujahr", "datum"):
            # from this date on, inclusive
            baujahr = parse_date(value)
            return Auto.baujahr >= baujahr if baujahr is not None else None
        if key == "homepage":
            return Auto.homepage == value
        return None

    def _build_schlagwoerter(self, suchparameter: Suchparameter) -> List[str]:
        return [
            schlagwort
            for flag, schlagwort in SCHLAGWORT_FLAGS.items()
            if flag in suchparameter and is_true(suchparameter[flag])
        ]
