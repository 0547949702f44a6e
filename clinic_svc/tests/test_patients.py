"""
Tests for patient endpoints.
"""
import pytest


def _create(client, payload):
    response = client.post("/patients", json=payload)
    assert response.status_code == 201
    return response.json()["patient"]


# Create

def test_create_patient_success(client, patient_payload):
    """Test successful patient creation."""
    response = client.post("/patients", json=patient_payload)
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Patient added successfully."
    patient = data["patient"]
    assert len(patient["id"]) == 32
    assert patient["planTraitement"] == "rest"
    assert patient["dateVaccination"] == "2023-01-01"
    assert patient["resultatsTest"] == "negative"
    assert patient["createdAt"].endswith("Z")


def test_create_patient_missing_fields(client, patient_payload):
    """Missing or empty fields are rejected with 400 and listed."""
    del patient_payload["disease"]
    patient_payload["planTraitement"] = ""

    response = client.post("/patients", json=patient_payload)

    assert response.status_code == 400
    data = response.json()
    assert data["message"] == "All fields are required."
    assert data["context"]["missing_fields"] == ["disease", "planTraitement"]


def test_create_patient_empty_body(client):
    """An empty object is missing every field."""
    response = client.post("/patients", json={})
    assert response.status_code == 400
    assert len(response.json()["context"]["missing_fields"]) == 11


def test_create_patient_age_zero_is_valid(client, patient_payload):
    """An age of 0 is a value, not a missing field."""
    patient_payload["age"] = 0
    patient = _create(client, patient_payload)
    assert patient["age"] == 0


def test_create_patient_wrong_type_returns_400(client, patient_payload):
    """A non-numeric age is a 400, not a framework 422."""
    patient_payload["age"] = "forty"
    response = client.post("/patients", json=patient_payload)
    assert response.status_code == 400
    data = response.json()
    assert data["message"] == "Invalid request body."
    assert data["context"]["fields"] == ["age"]


@pytest.mark.parametrize("bad_age", [10**20, -1, True, False])
def test_create_patient_age_out_of_range_returns_400(client, patient_payload, bad_age):
    """Ages that cannot be stored as an integer age are rejected, not a 500."""
    patient_payload["age"] = bad_age
    response = client.post("/patients", json=patient_payload)
    assert response.status_code == 400
    data = response.json()
    assert data["message"] == "Invalid request body."
    assert data["context"]["fields"] == ["age"]
    assert client.get("/patients").json() == []


@pytest.mark.parametrize("bad_age", [10**20, True])
def test_update_patient_age_out_of_range_returns_400(client, patient_payload, bad_age):
    created = _create(client, patient_payload)

    response = client.put(f"/patients/{created['id']}", json={**patient_payload, "age": bad_age})

    assert response.status_code == 400
    assert response.json()["context"]["fields"] == ["age"]
    fetched = client.get(f"/patients/{created['id']}").json()["patient"]
    assert fetched["age"] == patient_payload["age"]


def test_create_patient_whole_float_age_is_accepted(client, patient_payload):
    patient_payload["age"] = 40.0
    patient = _create(client, patient_payload)
    assert patient["age"] == 40


def test_create_patient_non_json_body_returns_400(client):
    response = client.post(
        "/patients",
        content="not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert "message" in response.json()


# List

def test_get_patients_empty(client):
    """Test getting patients when database is empty."""
    response = client.get("/patients")
    assert response.status_code == 200
    assert response.json() == []


def test_get_patients_in_insertion_order(client, patient_payload):
    """Patients are listed in the order they were added."""
    for name in ("Zebra", "Alice", "Bob"):
        _create(client, {**patient_payload, "name": name})

    response = client.get("/patients")
    assert response.status_code == 200
    assert [p["name"] for p in response.json()] == ["Zebra", "Alice", "Bob"]


# Get by id

def test_get_patient_by_id(client, patient_payload):
    created = _create(client, patient_payload)

    response = client.get(f"/patients/{created['id']}")

    assert response.status_code == 200
    data = response.json()
    assert "message" in data
    assert data["patient"] == created


def test_get_patient_unknown_id_returns_404(client):
    response = client.get(f"/patients/{'0' * 32}")
    assert response.status_code == 404
    assert response.json()["message"] == "Patient not found."


@pytest.mark.parametrize("bad_id", ["123", "not-an-id", "Z" * 32])
def test_get_patient_malformed_id_returns_404(client, bad_id):
    """A malformed id is reported as not found, never as a server error."""
    response = client.get(f"/patients/{bad_id}")
    assert response.status_code == 404


# Update

def test_update_patient_full_replace(client, patient_payload):
    """After an update, the patient reflects exactly the new values."""
    created = _create(client, patient_payload)
    new_values = {
        "name": "Joanna",
        "age": 41,
        "gender": "F",
        "disease": "cold",
        "antecedent": "asthma",
        "diagnostic": "cold",
        "medicaments": "paracetamol",
        "planTraitement": "sleep",
        "dateVaccination": "2024-02-02",
        "allergies": "pollen",
        "resultatsTest": "positive",
    }

    response = client.put(f"/patients/{created['id']}", json=new_values)

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Patient updated successfully."
    assert data["patient"]["id"] == created["id"]

    fetched = client.get(f"/patients/{created['id']}").json()["patient"]
    for key, value in new_values.items():
        assert fetched[key] == value
    assert fetched["createdAt"] == created["createdAt"]


def test_update_patient_missing_fields_returns_400(client, patient_payload):
    """Update applies the same presence rule as create."""
    created = _create(client, patient_payload)

    response = client.put(f"/patients/{created['id']}", json={"name": "Only a name"})

    assert response.status_code == 400
    assert "age" in response.json()["context"]["missing_fields"]
    # Nothing was written
    fetched = client.get(f"/patients/{created['id']}").json()["patient"]
    assert fetched["name"] == "Jo"


def test_update_patient_unknown_id_returns_404(client, patient_payload):
    response = client.put(f"/patients/{'a' * 32}", json=patient_payload)
    assert response.status_code == 404


def test_update_patient_malformed_id_returns_404(client, patient_payload):
    response = client.put("/patients/not-an-id", json=patient_payload)
    assert response.status_code == 404


# Delete

def test_create_list_delete_scenario(client, patient_payload):
    """Create, find in list, delete, then 404 on lookup."""
    created = _create(client, patient_payload)

    listed = client.get("/patients").json()
    assert created["id"] in [p["id"] for p in listed]

    response = client.delete(f"/patients/{created['id']}")
    assert response.status_code == 200
    assert response.json() == {"message": "Patient deleted successfully."}

    response = client.get(f"/patients/{created['id']}")
    assert response.status_code == 404


def test_delete_patient_twice_returns_404(client, patient_payload):
    created = _create(client, patient_payload)
    assert client.delete(f"/patients/{created['id']}").status_code == 200
    assert client.delete(f"/patients/{created['id']}").status_code == 404


def test_delete_patient_malformed_id_returns_404(client):
    assert client.delete("/patients/xyz").status_code == 404
