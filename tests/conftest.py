import pytest
from werkzeug.security import generate_password_hash

from sexed.app import create_app
from sexed.extensions import db
from sexed.models.student import Student
from sexed.models.user import User
from sexed.routes.community import CHANNELS_KEY, default_channels
from sexed.utils import kv_store
from sexed.utils.auth_utils import create_token

TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite://",
    "JWT_SECRET_KEY": "test-secret-key-with-enough-length-for-hs256",
    "SECRET_KEY": "test",
}


@pytest.fixture
def app():
    app = create_app(TEST_CONFIG)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def students(app):
    rows = [
        Student(registration_number="SCT211-0001/2021", name="Amina Wanjiru"),
        Student(registration_number="SCT211-0002/2021", name="Brian Otieno"),
    ]
    db.session.add_all(rows)
    db.session.commit()
    return rows


@pytest.fixture
def make_user(app):
    def _make_user(username, password="password123", user_type="student",
                   registration_number=None, full_name=None):
        user = User(
            username=username,
            password_hash=generate_password_hash(password),
            user_type=user_type,
            registration_number=registration_number,
            full_name=full_name,
        )
        db.session.add(user)
        db.session.commit()
        return user
    return _make_user


@pytest.fixture
def auth_headers(app):
    def _auth_headers(user):
        return {"Authorization": f"Bearer {create_token(user)}"}
    return _auth_headers


@pytest.fixture
def student(make_user):
    return make_user("alice", full_name="Alice")


@pytest.fixture
def student_headers(student, auth_headers):
    return auth_headers(student)


@pytest.fixture
def doctor(make_user):
    return make_user("drsmith", user_type="healthcare_professional", full_name="Dr Smith")


@pytest.fixture
def doctor_headers(doctor, auth_headers):
    return auth_headers(doctor)


@pytest.fixture
def admin_headers(make_user, auth_headers):
    return auth_headers(make_user("root", user_type="Admin"))


@pytest.fixture
def channels(app):
    kv_store.set(CHANNELS_KEY, default_channels())
    return kv_store.get(CHANNELS_KEY)
