from famhealth.models.family_member import FamilyMember
from famhealth.models.health_history import HealthHistory


def test_profile_created_on_first_read(client):
    r = client.get("/api/profile")
    assert r.status_code == 200
    body = r.json()
    assert body["user_id"] == "user-1"
    assert body["age"] is None
    assert body["onboarding_completed"] is False


def test_update_profile(client):
    r = client.put("/api/profile", json={"age": 41, "sex": "male", "height": "180cm", "lifestyle": "active"})
    assert r.status_code == 200
    assert r.json()["age"] == 41
    again = client.get("/api/profile").json()
    assert again["sex"] == "male"
    assert again["height"] == "180cm"


def test_profile_rejects_negative_age(client):
    r = client.put("/api/profile", json={"age": -3})
    assert r.status_code == 422


def test_dashboard_requires_onboarding(client):
    r = client.get("/api/dashboard")
    assert r.status_code == 409
    assert r.json()["message"] == "Onboarding not completed"


def test_onboarding_writes_all_records(client, db, onboarded):
    assert onboarded["onboarding_completed"] is True
    assert onboarded["age"] == 45
    assert onboarded["name"] == "Dana"

    members = db.query(FamilyMember).filter(FamilyMember.user_id == "user-1").all()
    assert sorted(m.relation for m in members) == ["Father", "Mother"]
    mother = next(m for m in members if m.relation == "Mother")
    assert mother.condition_list == ["Diabetes"]
    assert mother.condition_details == [{"id": "diabetes", "label": "Diabetes", "category": "Diabetes"}]

    history = db.query(HealthHistory).filter(HealthHistory.user_id == "user-1").one()
    assert history.current_conditions == ["Asthma"]
    assert history.medications == ["Metformin", "Ibuprofen"]
    assert history.allergies == ["Penicillin"]
    assert history.surgeries == []


def test_onboarding_skips_family_without_relation(client, db):
    r = client.post("/api/onboarding", json={
        "family_members": [{"relation": "  ", "conditions": ["Cancer"]}, {"relation": "Sister"}],
    })
    assert r.status_code == 200
    relations = [m.relation for m in db.query(FamilyMember).all()]
    assert relations == ["Sister"]


def test_dashboard_after_onboarding(client, onboarded):
    client.post("/api/results", json={"content": "HbA1c 5.4%"})
    r = client.get("/api/dashboard")
    assert r.status_code == 200
    body = r.json()
    assert body["family_count"] == 2
    assert body["my_conditions"] == ["Asthma"]
    assert len(body["recommendations"]) == 6
    assert [rec["test"] for rec in body["recommendations"]][:3] == [
        "Complete Blood Count (CBC)", "Basic Metabolic Panel", "Lipid Panel",
    ]
    assert body["recommendations"][2]["priority"] == "high"
    assert [res["content"] for res in body["recent_results"]] == ["HbA1c 5.4%"]
    assert body["stats"]["medications"] == 2
