"""
Create a healthcare professional (or admin) account.
Healthcare staff cannot sign up through the API; run this from the backend root:

    python create_staff.py <username> <password> [--name "Dr Jane Doe"] [--admin]
"""
import argparse

from werkzeug.security import generate_password_hash

from sexed.extensions import db
from sexed.models.user import User
from run import app


def create_staff(username, password, full_name=None, admin=False):
    user_type = "admin" if admin else "healthcare_professional"

    with app.app_context():
        db.create_all()

        existing = User.query.filter_by(username=username).first()
        if existing:
            print(f"❌ User already exists: {username}")
            return False

        user = User(
            username=username,
            password_hash=generate_password_hash(password),
            user_type=user_type,
            full_name=full_name or username,
        )

        try:
            db.session.add(user)
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            print(f"❌ Error creating {user_type}: {e}")
            raise

        print(f"✅ {user_type} account created: {username}")
        return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("username")
    parser.add_argument("password")
    parser.add_argument("--name", dest="full_name")
    parser.add_argument("--admin", action="store_true", help="create an admin instead")
    args = parser.parse_args()

    create_staff(args.username, args.password, args.full_name, args.admin)
