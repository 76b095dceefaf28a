from famhealth.services.conditions import ALL_CONDITIONS


def test_list_conditions(client):
    r = client.get("/api/conditions")
    assert r.status_code == 200
    body = r.json()
    assert len(body) == len(ALL_CONDITIONS)
    cancer = next(c for c in body if c["id"] == "cancer")
    assert cancer["follow_ups"] == ["subtype", "age_at_diagnosis"]
    assert "Breast" in cancer["subtypes"]


def test_lookup_condition(client):
    body = client.get("/api/conditions/Breast cancer").json()
    assert body["label"] == "Breast cancer"
    assert body["category"] == "Cancer"
    assert body["option"]["id"] == "cancer-breast"

    by_category = client.get("/api/conditions/Heart Disease").json()
    assert by_category["category"] == "Heart Disease"
    assert by_category["option"] is None


def test_unknown_condition_is_404(client):
    r = client.get("/api/conditions/not-a-condition")
    assert r.status_code == 404
    assert r.json()["code"] == "NOT_FOUND"


def test_medications_endpoint(client):
    client.put("/api/health", json={"medications": ["Atorvastatin", "Fish oil"], "allergies": ["Sulfa"]})
    client.post("/api/family", json={"relation": "Brother", "condition_list": ["Heart Disease"]})
    body = client.get("/api/medications").json()
    assert body["medications"][0]["info"]["category"] == "Statin (Cholesterol)"
    assert body["medications"][1]["info"] is None
    assert body["allergies"] == ["Sulfa"]
    assert body["family_conditions"] == ["Heart Disease"]
    assert body["disclaimer"]
