# famhealth/seed_user.py
import argparse
import os
from pathlib import Path

from dotenv import load_dotenv

ENV_PATH = Path(__file__).resolve().parent / ".env"
if ENV_PATH.exists():
    load_dotenv(ENV_PATH, override=False)

from famhealth.auth.jwt import hash_password  # noqa: E402
from famhealth.db.session import SessionLocal  # noqa: E402
from famhealth.models import init_db  # noqa: E402
from famhealth.models.family_member import FamilyMember  # noqa: E402
from famhealth.models.health_history import HealthHistory  # noqa: E402
from famhealth.models.user import User, UserProfile  # noqa: E402
from famhealth.services.conditions import details_from_labels  # noqa: E402

SAMPLE_FAMILY = (
    ("Mother", ["Diabetes", "Hypertension"]),
    ("Father", ["Heart Disease"]),
)


def main():
    parser = argparse.ArgumentParser(description="Create the demo account")
    parser.add_argument("--with-history", action="store_true", help="also add a sample family and health history")
    args = parser.parse_args()

    email = os.getenv("DEMO_USER_EMAIL", "demo@example.com").strip().lower()
    password = os.getenv("DEMO_USER_PASSWORD", "demo123")
    name = os.getenv("DEMO_USER_NAME", "Demo User")

    if not email or not password:
        raise SystemExit("Set DEMO_USER_EMAIL and DEMO_USER_PASSWORD before seeding")

    init_db()
    with SessionLocal() as db:
        exists = db.query(User).filter(User.email == email).first()
        if exists:
            print(f"User already exists: {email} (id={exists.id})")
            return

        user = User(email=email, hashed_password=hash_password(password), name=name)
        db.add(user)
        db.flush()
        db.add(UserProfile(user_id=user.id, age=42, sex="female", onboarding_completed=args.with_history))
        if args.with_history:
            for relation, labels in SAMPLE_FAMILY:
                db.add(FamilyMember(
                    user_id=user.id,
                    relation=relation,
                    condition_list=labels,
                    condition_details=details_from_labels(labels),
                ))
            db.add(HealthHistory(
                user_id=user.id,
                current_conditions=[],
                condition_details=[],
                medications=["Metformin"],
                allergies=["Penicillin"],
                surgeries=[],
            ))
        db.commit()
        print(f"Seeded user: {email} (id={user.id})")


if __name__ == "__main__":
    main()
