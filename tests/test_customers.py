from io import BytesIO

import pytest
from openpyxl import Workbook

from src.kurir.services.customers import match_columns, parse_customer_file


def _create(api_client, headers, name="Budi", phone="08123", address="Jl. Merdeka 1", **extra):
    return api_client.post(
        "/api/customers",
        json={"name": name, "phone": phone, "address": address, **extra},
        headers=headers,
    )


def test_customer_crud(api_client, auth_headers):
    created = _create(api_client, auth_headers, notes="Pagar hijau")
    assert created.status_code == 201
    customer = created.json()
    assert customer["notes"] == "Pagar hijau"
    assert customer["latitude"] is None

    updated = api_client.patch(
        f"/api/customers/{customer['id']}", json={"phone": "0899"}, headers=auth_headers
    )
    assert updated.json()["phone"] == "0899"
    assert updated.json()["name"] == "Budi"

    fetched = api_client.get(f"/api/customers/{customer['id']}", headers=auth_headers)
    assert fetched.json()["phone"] == "0899"

    assert api_client.delete(f"/api/customers/{customer['id']}", headers=auth_headers).status_code == 204
    assert api_client.get(f"/api/customers/{customer['id']}", headers=auth_headers).status_code == 404


def test_customers_listed_newest_first(api_client, auth_headers):
    _create(api_client, auth_headers, name="Pertama")
    _create(api_client, auth_headers, name="Kedua")

    names = [customer["name"] for customer in api_client.get("/api/customers", headers=auth_headers).json()]

    assert names == ["Kedua", "Pertama"]


def test_blank_required_field_is_rejected(api_client, auth_headers, fake_db):
    response = _create(api_client, auth_headers, phone="   ")

    assert response.status_code == 400
    assert "phone" in response.json()["error"]
    assert fake_db.tables["customers"] == []


def test_customers_are_scoped_to_their_owner(api_client, auth_headers, other_user_headers):
    customer = _create(api_client, auth_headers).json()

    assert api_client.get(f"/api/customers/{customer['id']}", headers=other_user_headers).status_code == 404
    assert api_client.get("/api/customers", headers=other_user_headers).json() == []


def test_import_csv_skips_incomplete_rows(api_client, auth_headers, fake_db):
    content = "Nama,Phone,Alamat,Catatan\nBudi,0811,Jl. Merdeka 1,\nSiti,,Jl. Melati 2,\nAgus,0812,Jl. Mawar 3,Rumah biru\n"

    response = api_client.post(
        "/api/customers/import",
        files={"file": ("pelanggan.csv", content.encode("utf-8"), "text/csv")},
        headers=auth_headers,
    )

    assert response.status_code == 201
    assert response.json() == {
        "fileName": "pelanggan.csv",
        "imported": 2,
        "skipped": [{"row": 2, "missing": ["phone"]}],
    }
    rows = fake_db.tables["customers"]
    assert {row["name"] for row in rows} == {"Budi", "Agus"}
    assert all(row["user_id"] == "user-1" for row in rows)


def test_import_xlsx(api_client, auth_headers):
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["Customer Name", "Phone Number", "Address"])
    sheet.append(["Budi", 811, "Jl. Merdeka 1"])
    buffer = BytesIO()
    workbook.save(buffer)

    response = api_client.post(
        "/api/customers/import",
        files={"file": ("customers.xlsx", buffer.getvalue(), "application/octet-stream")},
        headers=auth_headers,
    )

    assert response.status_code == 201
    assert response.json()["imported"] == 1
    assert api_client.get("/api/customers", headers=auth_headers).json()[0]["phone"] == "811"


def test_import_rejects_unsupported_files(api_client, auth_headers):
    response = api_client.post(
        "/api/customers/import",
        files={"file": ("customers.txt", b"name,phone,address\n", "text/plain")},
        headers=auth_headers,
    )

    assert response.status_code == 415


def test_import_requires_core_columns():
    with pytest.raises(ValueError, match="address"):
        parse_customer_file("customers.csv", b"name,phone\nBudi,0811\n")


def test_match_columns_accepts_common_aliases():
    assert match_columns(["Nama Pelanggan", "No HP", "alamat", "Remarks"]) == {
        "name": "Nama Pelanggan",
        "phone": "No HP",
        "address": "alamat",
        "notes": "Remarks",
    }


@pytest.mark.parametrize("changes", [{"name": "   "}, {"address": None}, {"phone": "\t"}])
def test_update_rejects_blank_required_field(api_client, auth_headers, changes):
    customer = _create(api_client, auth_headers).json()

    response = api_client.patch(f"/api/customers/{customer['id']}", json=changes, headers=auth_headers)

    assert response.status_code == 400
    assert next(iter(changes)) in response.json()["error"]
    fetched = api_client.get(f"/api/customers/{customer['id']}", headers=auth_headers).json()
    assert (fetched["name"], fetched["phone"], fetched["address"]) == ("Budi", "08123", "Jl. Merdeka 1")


def test_update_strips_text_fields(api_client, auth_headers):
    customer = _create(api_client, auth_headers, notes="Pagar hijau").json()

    updated = api_client.patch(
        f"/api/customers/{customer['id']}", json={"name": "  Ani  ", "notes": "  "}, headers=auth_headers
    ).json()

    assert updated["name"] == "Ani"
    assert updated["notes"] is None


def test_import_rejects_corrupt_workbook(api_client, auth_headers, fake_db):
    response = api_client.post(
        "/api/customers/import",
        files={"file": ("customers.xlsx", b"not a zip archive", "application/octet-stream")},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert "customers.xlsx" in response.json()["error"]
    assert fake_db.tables["customers"] == []


def test_parse_corrupt_workbook_raises_value_error():
    with pytest.raises(ValueError, match="Excel workbook"):
        parse_customer_file("customers.xlsx", b"not a zip archive")
