from case_manager.models.patient import Patient
from case_manager.models.user import User
from case_manager.services.auth import verify_password

from seed_data import PATIENTS, USERS, seed


def test_seed_creates_users_and_patients(db_session):
    seed(db_session)

    users = {u.username: u for u in db_session.query(User).all()}
    assert set(users) == {u["username"] for u in USERS}
    assert users["admin"].is_admin is True
    assert verify_password("Hotline@123", users["hotline"].hashed_password)

    phones = {p.primary_phone for p in db_session.query(Patient).all()}
    assert phones == {p["primary_phone"] for p in PATIENTS}


def test_seed_is_idempotent(db_session):
    seed(db_session)
    seed(db_session)

    assert db_session.query(User).count() == len(USERS)
    assert db_session.query(Patient).count() == len(PATIENTS)
