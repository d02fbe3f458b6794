from datetime import date
from decimal import Decimal
from typing import List, Optional

import strawberry

from models.auto import Auto as AutoModel
from models.auto import Autoart as AutoartModel

Autoart = strawberry.enum(AutoartModel, name="Autoart")


@strawberry.type
class Fahrzeugschein:
    identifikations_nummer: str
    erstzulassung: Optional[date]
    gueltig_bis: Optional[date]


@strawberry.type
class Ausstattung:
    bezeichnung: str
    beschreibung: Optional[str]
    preis: Decimal


@strawberry.type
class Auto:
    id: int
    version: int
    fin: str
    rating: int
    art: Optional[Autoart]
    preis: Decimal
    verfuegbar: bool
    baujahr: Optional[date]
    homepage: Optional[str]
    schlagwoerter: List[str]
    fahrzeugschein: Optional[Fahrzeugschein]
    ausstattungen: Optional[List[Ausstattung]]
    rabatt_wert: strawberry.Private[Decimal]

    @strawberry.field
    def rabatt(self, short: Optional[bool] = None) -> str:
        """Discount as text: "0.05 %" by default, "0.05 Prozent" with short: false."""
        einheit = "%" if short is None or short else "Prozent"
        return f"{format(self.rabatt_wert.normalize(), 'f')} {einheit}"

    @classmethod
    def from_model(cls, auto: AutoModel, mit_ausstattungen: bool = False) -> "Auto":
        fahrzeugschein = None
        if auto.fahrzeugschein is not None:
            fahrzeugschein = Fahrzeugschein(
                identifikations_nummer=auto.fahrzeugschein.identifikations_nummer,
                erstzulassung=auto.fahrzeugschein.erstzulassung,
                gueltig_bis=auto.fahrzeugschein.gueltig_bis,
            )

        ausstattungen = None
        if mit_ausstattungen:
            ausstattungen = [
                Ausstattung(bezeichnung=a.bezeichnung, beschreibung=a.beschreibung, preis=a.preis)
                for a in auto.ausstattungen
            ]

        return cls(
            id=auto.id,
            version=auto.version,
            fin=auto.fin,
            rating=auto.rating,
            art=auto.art,
            preis=auto.preis,
            verfuegbar=auto.verfuegbar,
            baujahr=auto.baujahr,
            homepage=auto.homepage,
            schlagwoerter=list(auto.schlagwoerter or []),
            fahrzeugschein=fahrzeugschein,
            ausstattungen=ausstattungen,
            rabatt_wert=auto.rabatt if auto.rabatt is not None else Decimal("0"),
        )


@strawberry.input
class SuchparameterInput:
    identifikations_nummer: Optional[str] = None
    fin: Optional[str] = None
    rating: Optional[int] = None
    preis: Optional[Decimal] = None
    art: Optional[Autoart] = None
    verfuegbar: Optional[bool] = None
    baujahr: Optional[date] = None
    homepage: Optional[str] = None

    # tag flags
    allrad: Optional[bool] = None
    benzin: Optional[bool] = None
    budget: Optional[bool] = None
    business: Optional[bool] = None
    cabrio: Optional[bool] = None
    e_auto: Optional[bool] = strawberry.field(default=None, name="e_auto")
    einfach: Optional[bool] = None
    familie: Optional[bool] = None
    hybrid: Optional[bool] = None
    komfort: Optional[bool] = None
    kombi: Optional[bool] = None
    nutzfahrzeug: Optional[bool] = None
    pickup: Optional[bool] = None
    reichweite: Optional[bool] = None
    sparsam: Optional[bool] = None
    sport: Optional[bool] = None
    suv: Optional[bool] = None
    tech: Optional[bool] = None
    vier_x_vier: Optional[bool] = strawberry.field(default=None, name="vier_x_vier")


@strawberry.input
class FahrzeugscheinInput:
    identifikations_nummer: str
    erstzulassung: date
    gueltig_bis: date


@strawberry.input
class AusstattungInput:
    bezeichnung: str
    beschreibung: str
    preis: Decimal


@strawberry.input
class AutoInput:
    fin: str
    rating: int
    preis: Decimal
    fahrzeugschein: FahrzeugscheinInput
    art: Optional[Autoart] = None
    rabatt: Optional[Decimal] = None
    verfuegbar: Optional[bool] = None
    baujahr: Optional[date] = None
    homepage: Optional[str] = None
    schlagwoerter: Optional[List[str]] = None
    ausstattungen: Optional[List[AusstattungInput]] = None


@strawberry.input
class AutoUpdateInput:
    id: strawberry.ID
    version: int
    fin: str
    rating: int
    preis: Decimal
    art: Optional[Autoart] = None
    rabatt: Optional[Decimal] = None
    verfuegbar: Optional[bool] = None
    baujahr: Optional[date] = None
    homepage: Optional[str] = None
    schlagwoerter: Optional[List[str]] = None


@strawberry.type
class CreatePayload:
    id: int


@strawberry.type
class UpdatePayload:
    version: int


@strawberry.type
class DeletePayload:
    success: bool
