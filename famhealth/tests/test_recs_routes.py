def test_recommendations_for_empty_records(client):
    r = client.get("/api/recommendations")
    assert r.status_code == 200
    body = r.json()
    assert [rec["test"] for rec in body["recommendations"]] == [
        "Complete Blood Count (CBC)", "Basic Metabolic Panel", "Lipid Panel",
    ]
    assert body["recommendations"][2]["frequency"] == "Every 4-6 years"
    assert body["grouped"] == {"high": [], "medium": [], "routine": body["recommendations"]}


def test_recommendations_use_stored_records(client):
    client.put("/api/profile", json={"age": 45, "sex": "female"})
    client.post("/api/family", json={"relation": "Father", "condition_list": ["Hypertension"]})
    client.post("/api/health/conditions", json={"condition": "cancer", "subtype": "Breast"})

    body = client.get("/api/recommendations").json()
    by_test = {rec["test"]: rec for rec in body["recommendations"]}
    assert by_test["Lipid Panel"]["priority"] == "high"
    assert by_test["Cancer Marker Screening"]["priority"] == "high"
    assert by_test["Mammogram"]["priority"] == "high"
    assert by_test["Colonoscopy"]["priority"] == "high"
    assert [rec["test"] for rec in body["grouped"]["high"]] == [
        "Lipid Panel", "Blood Pressure Monitoring", "Cancer Marker Screening", "Mammogram", "Colonoscopy",
    ]


def test_top_recommendations(client):
    client.put("/api/profile", json={"age": 60, "sex": "female"})
    client.post("/api/family", json={"relation": "Mother", "condition_list": ["Diabetes", "Cancer"]})
    full = client.get("/api/recommendations").json()["recommendations"]
    assert client.get("/api/recommendations/top").json() == full[:6]
    assert client.get("/api/recommendations/top", params={"limit": 2}).json() == full[:2]
    assert client.get("/api/recommendations/top", params={"limit": 0}).status_code == 422
