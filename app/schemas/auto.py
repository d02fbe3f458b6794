from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, ValidationError, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from models.ausstattung import Ausstattung
from models.auto import Auto, Autoart
from models.fahrzeugschein import Fahrzeugschein

MAX_RATING = 5

PREIS_SCALE = Decimal("0.000001")
RABATT_SCALE = Decimal("0.0001")

_http_url = TypeAdapter(HttpUrl)


def _quantize(value: Decimal, scale: Decimal, field: str) -> Decimal:
    try:
        return value.quantize(scale)
    except InvalidOperation:
        raise PydanticCustomError("decimal_scale", f"{field} ist keine gueltige Dezimalzahl.")


class CamelModel(BaseModel):
    """JSON keys in camelCase, Python attributes in snake_case."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Request bodies

class FahrzeugscheinDTO(CamelModel):
    identifikations_nummer: str = Field(..., max_length=10, pattern=r"^[A-ZÄÖÜ]{1,3}-[A-Z]{1,3}\d{1,4}$")
    erstzulassung: date = Field(..., description="ISO 8601, e.g. 2021-01-31")
    gueltig_bis: date = Field(..., description="ISO 8601, e.g. 2027-01-31")


class AusstattungDTO(CamelModel):
    bezeichnung: str = Field(..., max_length=32)
    beschreibung: str = Field(..., max_length=128)
    preis: Decimal

    @field_validator("preis")
    def preis_positiv(cls, v):
        if v < 0:
            raise PydanticCustomError("decimal_min", "preis muss positiv sein.")
        return _quantize(v, PREIS_SCALE, "preis")


class AutoDtoOhneRef(CamelModel):
    """Scalar fields of an auto, used as the body for updates."""

    fin: str
    rating: int = Field(..., ge=0, le=MAX_RATING)
    art: Optional[Autoart] = None
    preis: Decimal
    rabatt: Optional[Decimal] = None
    verfuegbar: Optional[bool] = None
    baujahr: Optional[date] = None
    homepage: Optional[str] = None
    schlagwoerter: Optional[List[str]] = None

    @field_validator("fin")
    def fin_format(cls, v):
        if len(v) != 17 or not all(c.isdigit() or ("A" <= c <= "Z" and c not in "IOQ") for c in v):
            raise PydanticCustomError(
                "fin_format",
                "FIN muss 17 Zeichen lang sein und darf nur Großbuchstaben (außer I,O,Q) und Ziffern enthalten.",
            )
        return v

    @field_validator("preis")
    def preis_positiv(cls, v):
        if v < 0:
            raise PydanticCustomError("decimal_min", "preis muss positiv sein.")
        return _quantize(v, PREIS_SCALE, "preis")

    @field_validator("rabatt")
    def rabatt_bereich(cls, v):
        if v is None:
            return v
        if v < 0:
            raise PydanticCustomError("decimal_min", "rabatt muss positiv sein.")
        if v >= 1:
            raise PydanticCustomError("decimal_max", "rabatt muss kleiner 1 sein.")
        return _quantize(v, RABATT_SCALE, "rabatt")

    @field_validator("homepage")
    def homepage_url(cls, v):
        if v is None:
            return v
        try:
            _http_url.validate_python(v)
        except ValidationError:
            raise PydanticCustomError("url", "homepage muss eine URL sein.")
        # the original spelling is stored, not the normalized URL
        return v

    @field_validator("schlagwoerter")
    def schlagwoerter_eindeutig(cls, v):
        if v is None:
            return v
        return list(dict.fromkeys(v))

    def to_update_values(self) -> Dict[str, Any]:
        """Column values for an UPDATE of the auto row."""
        return {
            "fin": self.fin,
            "rating": self.rating,
            "art": self.art,
            "preis": self.preis,
            "rabatt": self.rabatt if self.rabatt is not None else Decimal("0"),
            "verfuegbar": bool(self.verfuegbar),
            "baujahr": self.baujahr,
            "homepage": self.homepage,
            "schlagwoerter": self.schlagwoerter or [],
        }


class AutoDTO(AutoDtoOhneRef):
    """Body for creating an auto together with its registration and equipment."""

    fahrzeugschein: FahrzeugscheinDTO
    ausstattungen: Optional[List[AusstattungDTO]] = None

    def to_auto(self) -> Auto:
        auto = Auto(version=0, **self.to_update_values())
        auto.fahrzeugschein = Fahrzeugschein(
            identifikations_nummer=self.fahrzeugschein.identifikations_nummer,
            erstzulassung=self.fahrzeugschein.erstzulassung,
            gueltig_bis=self.fahrzeugschein.gueltig_bis,
        )
        auto.ausstattungen = [
            Ausstattung(
                bezeichnung=a.bezeichnung,
                beschreibung=a.beschreibung,
                preis=a.preis,
            )
            for a in self.ausstattungen or []
        ]
        return auto


# Responses

class FahrzeugscheinOut(CamelModel):
    identifikations_nummer: str
    erstzulassung: Optional[date] = None
    gueltig_bis: Optional[date] = None


class AusstattungOut(CamelModel):
    bezeichnung: str
    beschreibung: Optional[str] = None
    preis: Decimal


class AutoOut(CamelModel):
    id: int
    fin: str
    rating: int
    art: Optional[Autoart] = None
    preis: Decimal
    rabatt: Decimal
    verfuegbar: bool
    baujahr: Optional[date] = None
    homepage: Optional[str] = None
    schlagwoerter: List[str] = []
    erzeugt: Optional[datetime] = None
    aktualisiert: Optional[datetime] = None
    fahrzeugschein: Optional[FahrzeugscheinOut] = None


class AutoMitAusstattungenOut(AutoOut):
    ausstattungen: List[AusstattungOut] = []
