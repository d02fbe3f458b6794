import os
import sys
import asyncio
from datetime import date
from decimal import Decimal

# Needed to import core and models when run as a script
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.db import AsyncSessionLocal, Base, engine
from core.logging import get_logger, setup_logging
from models import Ausstattung, Auto, Autoart, Fahrzeugschein

logger = get_logger("seed")


def sample_autos():
    return [
        Auto(
            fin="WDB12345678901234", rating=4, art=Autoart.LIMOUSINE,
            preis=Decimal("45990.000000"), rabatt=Decimal("0.0500"), verfuegbar=True,
            baujahr=date(2021, 3, 15), homepage="https://mercedes.example.com",
            schlagwoerter=["KOMFORT", "BUSINESS"],
            fahrzeugschein=Fahrzeugschein(identifikations_nummer="S-MB1234", erstzulassung=date(2021, 4, 1), gueltig_bis=date(2027, 4, 1)),
            ausstattungen=[
                Ausstattung(bezeichnung="Navigation", beschreibung="Navi mit Touchscreen", preis=Decimal("999")),
                Ausstattung(bezeichnung="Sitzheizung", beschreibung="Vorne links und rechts", preis=Decimal("450")),
            ],
        ),
        Auto(
            fin="HYU12398765412TUC", rating=3, art=Autoart.SUV,
            preis=Decimal("32500.000000"), rabatt=Decimal("0.1000"), verfuegbar=True,
            baujahr=date(2020, 6, 1), homepage="https://hyundai.example.com",
            schlagwoerter=["FAMILIE", "ALLRAD", "4x4"],
            fahrzeugschein=Fahrzeugschein(identifikations_nummer="KA-HY42", erstzulassung=date(2020, 7, 1), gueltig_bis=date(2026, 7, 1)),
            ausstattungen=[
                Ausstattung(bezeichnung="Anhaengerkupplung", beschreibung="Abnehmbar", preis=Decimal("780")),
            ],
        ),
        Auto(
            fin="TSL5YJ3E1EA123456", rating=5, art=Autoart.E_AUTO,
            preis=Decimal("52990.000000"), rabatt=Decimal("0.0000"), verfuegbar=False,
            baujahr=date(2023, 1, 10), homepage="https://tesla.example.com",
            schlagwoerter=["E-AUTO", "TECH", "REICHWEITE"],
            fahrzeugschein=Fahrzeugschein(identifikations_nummer="M-TS3", erstzulassung=date(2023, 2, 1), gueltig_bis=date(2029, 2, 1)),
        ),
        Auto(
            fin="VWV0ZZZ1KZ1234567", rating=2, art=Autoart.KOMBI,
            preis=Decimal("18900.000000"), rabatt=Decimal("0.0250"), verfuegbar=True,
            baujahr=date(2018, 9, 20), homepage="https://vw.example.com",
            schlagwoerter=["BUDGET", "SPARSAM", "FAMILIE"],
            fahrzeugschein=Fahrzeugschein(identifikations_nummer="WOB-VW77", erstzulassung=date(2018, 10, 1), gueltig_bis=date(2024, 10, 1)),
        ),
        Auto(
            fin="FRD1PCKUP00000042", rating=4, art=Autoart.PICKUP,
            preis=Decimal("41200.000000"), rabatt=Decimal("0.0000"), verfuegbar=True,
            baujahr=date(2022, 5, 5), homepage="https://ford.example.com",
            schlagwoerter=["NUTZFAHRZEUG", "ALLRAD", "BENZIN"],
            fahrzeugschein=Fahrzeugschein(identifikations_nummer="K-FD900", erstzulassung=date(2022, 6, 1), gueltig_bis=date(2028, 6, 1)),
        ),
    ]


async def seed():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        db.add_all(sample_autos())
        await db.commit()

    logger.info("Seed data inserted successfully")
    await engine.dispose()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(seed())
