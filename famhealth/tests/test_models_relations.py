from sqlalchemy import text

from famhealth.models.chat_log import ChatLog
from famhealth.models.family_member import FamilyMember
from famhealth.models.health_history import HealthHistory
from famhealth.models.test_result import TestResult
from famhealth.models.user import User, UserProfile


def test_user_records_and_relationships(db):
    user = User(email="rel@example.com", hashed_password="hashed")
    db.add(user)
    db.flush()

    db.add(UserProfile(user_id=user.id, age=42, sex="female"))
    member = FamilyMember(user_id=user.id, relation="Mother", condition_list=["Diabetes"], condition_details=[])
    db.add(member)
    db.add(HealthHistory(user_id=user.id, current_conditions=["Asthma"], medications=["Metformin"]))
    db.flush()
    db.add(TestResult(user_id=user.id, family_member_id=member.id, type="manual", content="HbA1c 6.1%"))
    db.add(ChatLog(user_id=user.id, message="q", response="a", source="canned"))
    db.commit()

    loaded = db.query(User).filter_by(id=user.id).one()
    assert loaded.profile.age == 42
    assert loaded.profile.sex == "female"
    assert loaded.profile.onboarding_completed is False
    assert loaded.family_members[0].condition_list == ["Diabetes"]
    assert loaded.health_history.medications == ["Metformin"]
    assert loaded.test_results[0].content == "HbA1c 6.1%"
    assert loaded.chat_logs[0].source == "canned"
    # reverse relations
    assert loaded.family_members[0].user.id == user.id
    assert loaded.test_results[0].user.id == user.id


def test_health_fields_are_encrypted_at_rest(db):
    db.add(HealthHistory(user_id="user-x", medications=["Sertraline"], allergies=["Latex"]))
    db.commit()
    raw = db.execute(text("SELECT medications FROM health_history WHERE user_id = 'user-x'")).scalar_one()
    assert "Sertraline" not in raw
    assert db.query(HealthHistory).filter_by(user_id="user-x").one().medications == ["Sertraline"]


def test_deleting_user_removes_records(db):
    user = User(email="gone@example.com", hashed_password="hashed")
    db.add(user)
    db.flush()
    db.add(FamilyMember(user_id=user.id, relation="Son", condition_list=[], condition_details=[]))
    db.commit()

    db.delete(db.query(User).filter_by(id=user.id).one())
    db.commit()
    assert db.query(FamilyMember).count() == 0
