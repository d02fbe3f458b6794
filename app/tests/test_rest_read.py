from types import SimpleNamespace

from conftest import make_auto
from services.exceptions import DatabaseQueryError, NotFoundError
from services.pageable import Slice


def test_get_by_id(client, read_service):
    read_service.find_by_id.return_value = make_auto(id=1, version=2)

    response = client.get("/rest/1")

    assert response.status_code == 200
    assert response.headers["ETag"] == '"2"'
    body = response.json()
    assert body["id"] == 1
    assert body["fin"] == "WDB12345678901234"
    assert body["fahrzeugschein"]["identifikationsNummer"] == "S-MB1234"
    assert body["ausstattungen"][0]["bezeichnung"] == "Navigation"
    read_service.find_by_id.assert_awaited_once_with(1, mit_ausstattungen=True)


def test_get_by_id_not_modified(client, read_service):
    read_service.find_by_id.return_value = make_auto(id=1, version=0)

    response = client.get("/rest/1", headers={"If-None-Match": '"0"'})

    assert response.status_code == 304
    assert response.content == b""


def test_get_by_id_stale_etag_returns_body(client, read_service):
    read_service.find_by_id.return_value = make_auto(id=1, version=1)

    response = client.get("/rest/1", headers={"If-None-Match": '"0"'})

    assert response.status_code == 200
    assert response.headers["ETag"] == '"1"'


def test_get_by_id_not_found(client, read_service):
    read_service.find_by_id.side_effect = NotFoundError("Es gibt kein Auto mit der ID 999.")

    response = client.get("/rest/999")

    assert response.status_code == 404
    assert response.json() == {
        "statusCode": 404,
        "error": "Not Found",
        "message": "Es gibt kein Auto mit der ID 999.",
    }


def test_get_by_non_numeric_id(client, read_service):
    response = client.get("/rest/abc")

    assert response.status_code == 404
    read_service.find_by_id.assert_not_awaited()


def test_database_error_is_500(client, read_service):
    read_service.find_by_id.side_effect = DatabaseQueryError("connection lost")

    response = client.get("/rest/1")

    assert response.status_code == 500
    assert response.json()["statusCode"] == 500


def test_find_returns_page(client, read_service):
    autos = [make_auto(id=1, mit_ausstattungen=False), make_auto(id=2, fin="HYU12398765412TUC", mit_ausstattungen=False)]
    read_service.find.return_value = Slice(content=autos, total_elements=7)

    response = client.get("/rest", params={"rating": "4", "sport": "true", "page": "1", "size": "2"})

    assert response.status_code == 200
    body = response.json()
    assert [a["id"] for a in body["content"]] == [1, 2]
    assert "ausstattungen" not in body["content"][0]
    assert body["page"] == {"size": 2, "number": 1, "totalElements": 7, "totalPages": 4}

    suchparameter, pageable = read_service.find.await_args.args
    assert suchparameter == {"rating": "4", "sport": "true"}
    assert (pageable.number, pageable.size) == (1, 2)


def test_find_defaults_paging(client, read_service):
    read_service.find.return_value = Slice(content=[make_auto(id=1)], total_elements=1)

    response = client.get("/rest")

    assert response.status_code == 200
    suchparameter, pageable = read_service.find.await_args.args
    assert suchparameter == {}
    assert (pageable.number, pageable.size) == (0, 5)


def test_find_unknown_parameter_is_404(client, read_service):
    read_service.find.side_effect = NotFoundError("Ungueltige Suchparameter")

    response = client.get("/rest", params={"foo": "bar"})

    assert response.status_code == 404
    assert response.json()["message"] == "Ungueltige Suchparameter"


def test_find_only_count(client, read_service):
    read_service.count.return_value = 42

    response = client.get("/rest", params={"only": "count"})

    assert response.status_code == 200
    assert response.json() == {"count": 42}
    read_service.find.assert_not_awaited()


def test_find_only_with_other_value_still_counts(client, read_service):
    read_service.count.return_value = 7

    response = client.get("/rest", params={"only": "anzahl", "rating": "4"})

    assert response.status_code == 200
    assert response.json() == {"count": 7}
    read_service.find.assert_not_awaited()


def test_get_file(client, read_service):
    read_service.find_file_by_auto_id.return_value = SimpleNamespace(
        filename="bild.jpg", data=b"\xff\xd8\xffdata", mimetype="image/jpeg"
    )

    response = client.get("/rest/file/1")

    assert response.status_code == 200
    assert response.content == b"\xff\xd8\xffdata"
    assert response.headers["content-type"] == "image/jpeg"
    assert response.headers["content-disposition"] == 'inline; filename="bild.jpg"'


def test_get_file_without_mimetype_defaults_to_png(client, read_service):
    read_service.find_file_by_auto_id.return_value = SimpleNamespace(filename="x", data=b"abc", mimetype=None)

    response = client.get("/rest/file/1")

    assert response.headers["content-type"] == "image/png"


def test_get_file_missing(client, read_service):
    read_service.find_file_by_auto_id.side_effect = NotFoundError("Keine Datei für Auto mit der ID 1 gefunden.")

    response = client.get("/rest/file/1")

    assert response.status_code == 404
    assert "Keine Datei" in response.json()["message"]
