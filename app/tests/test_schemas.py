from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from conftest import make_auto
from models.auto import Autoart
from schemas.auto import AutoDTO, AutoDtoOhneRef, AutoMitAusstattungenOut, AutoOut
from scripts.seed_data import sample_autos


def test_auto_dto_accepts_camel_case_body(auto_payload):
    dto = AutoDTO.model_validate(auto_payload)

    assert dto.fin == "HUN12345678923451"
    assert dto.art is Autoart.SUV
    assert dto.fahrzeugschein.identifikations_nummer == "AB-CD1234"
    assert dto.fahrzeugschein.gueltig_bis == date(2028, 3, 1)
    assert dto.ausstattungen[0].preis == Decimal("999.000000")


def test_decimals_are_quantized(auto_payload):
    dto = AutoDTO.model_validate(auto_payload)

    assert dto.preis == Decimal("32500.500000")
    assert dto.preis.as_tuple().exponent == -6
    assert dto.rabatt == Decimal("0.1000")
    assert dto.rabatt.as_tuple().exponent == -4


@pytest.mark.parametrize("fin", ["WDB1234567890123", "WDB12345678901234X", "IDB12345678901234", "wdb12345678901234"])
def test_invalid_fin(auto_payload, fin):
    auto_payload["fin"] = fin

    with pytest.raises(ValidationError, match="FIN muss 17 Zeichen lang sein"):
        AutoDTO.model_validate(auto_payload)


@pytest.mark.parametrize("fin", [sample.fin for sample in sample_autos()])
def test_sample_autos_have_valid_fin(auto_payload, fin):
    auto_payload["fin"] = fin

    assert AutoDTO.model_validate(auto_payload).fin == fin


@pytest.mark.parametrize("rating", [-1, 6])
def test_rating_range(auto_payload, rating):
    auto_payload["rating"] = rating

    with pytest.raises(ValidationError):
        AutoDTO.model_validate(auto_payload)


def test_negative_preis(auto_payload):
    auto_payload["preis"] = -1

    with pytest.raises(ValidationError, match="preis muss positiv sein."):
        AutoDTO.model_validate(auto_payload)


@pytest.mark.parametrize("rabatt,message", [(-0.1, "rabatt muss positiv sein."), (1, "rabatt muss kleiner 1 sein.")])
def test_rabatt_range(auto_payload, rabatt, message):
    auto_payload["rabatt"] = rabatt

    with pytest.raises(ValidationError, match=message):
        AutoDTO.model_validate(auto_payload)


def test_rabatt_zero_is_allowed(auto_payload):
    auto_payload["rabatt"] = 0
    assert AutoDTO.model_validate(auto_payload).rabatt == Decimal("0")


def test_invalid_homepage(auto_payload):
    auto_payload["homepage"] = "keine url"

    with pytest.raises(ValidationError, match="homepage muss eine URL sein."):
        AutoDTO.model_validate(auto_payload)


def test_homepage_keeps_original_spelling(auto_payload):
    auto_payload["homepage"] = "https://test.de"
    assert AutoDTO.model_validate(auto_payload).homepage == "https://test.de"


def test_keywords_are_deduplicated_in_order(auto_payload):
    auto_payload["schlagwoerter"] = ["SPORT", "4x4", "SPORT"]
    assert AutoDTO.model_validate(auto_payload).schlagwoerter == ["SPORT", "4x4"]


def test_invalid_registration_code(auto_payload):
    auto_payload["fahrzeugschein"]["identifikationsNummer"] = "abc"

    with pytest.raises(ValidationError) as exc_info:
        AutoDTO.model_validate(auto_payload)

    locations = [err["loc"] for err in exc_info.value.errors()]
    assert ("fahrzeugschein", "identifikationsNummer") in locations


def test_equipment_description_too_long(auto_payload):
    auto_payload["ausstattungen"][0]["beschreibung"] = "x" * 129

    with pytest.raises(ValidationError):
        AutoDTO.model_validate(auto_payload)


def test_registration_is_required(auto_payload):
    del auto_payload["fahrzeugschein"]

    with pytest.raises(ValidationError):
        AutoDTO.model_validate(auto_payload)


def test_update_values_defaults():
    dto = AutoDtoOhneRef.model_validate({"fin": "WDB12345678901234", "rating": 1, "preis": "10"})

    values = dto.to_update_values()

    assert values["rabatt"] == Decimal("0")
    assert values["verfuegbar"] is False
    assert values["schlagwoerter"] == []
    assert values["art"] is None
    assert "fahrzeugschein" not in values


def test_to_auto_builds_the_whole_aggregate(auto_payload):
    auto = AutoDTO.model_validate(auto_payload).to_auto()

    assert auto.version == 0
    assert auto.fin == "HUN12345678923451"
    assert auto.fahrzeugschein.identifikations_nummer == "AB-CD1234"
    assert [a.bezeichnung for a in auto.ausstattungen] == ["Navigation"]


def test_auto_out_serializes_camel_case_and_decimal_strings():
    body = AutoOut.model_validate(make_auto(id=3)).model_dump(mode="json", by_alias=True)

    assert body["id"] == 3
    assert body["preis"] == "45990.000000"
    assert body["rabatt"] == "0.0500"
    assert body["fahrzeugschein"]["identifikationsNummer"] == "S-MB1234"
    assert body["fahrzeugschein"]["gueltigBis"] == "2027-04-01"
    assert "ausstattungen" not in body


def test_auto_mit_ausstattungen_out():
    body = AutoMitAusstattungenOut.model_validate(make_auto(id=3)).model_dump(mode="json", by_alias=True)

    assert body["ausstattungen"] == [
        {"bezeichnung": "Navigation", "beschreibung": "Navi mit Touchscreen", "preis": "999.000000"}
    ]
