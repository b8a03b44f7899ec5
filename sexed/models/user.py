from datetime import datetime

from sexed.extensions import db

USER_TYPE_ALIASES = {
    "student": "student",
    "healthcare": "healthcare",
    "healthcare_professional": "healthcare",
    "admin": "admin",
    "administrator": "admin",
}


def normalize_user_type(value):
    """
    Map stored role strings onto the roles the client understands.

    "healthcare_professional" / "Healthcare Professional" -> "healthcare"
    "Student"                                             -> "student"
    "Admin" / "Administrator"                             -> "admin"
    """
    if not value:
        return "student"
    key = str(value).strip().lower().replace(" ", "_")
    return USER_TYPE_ALIASES.get(key, key)


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)

    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.Text, nullable=False)
    user_type = db.Column(db.String(40), nullable=False, default="student")

    # Only students carry one; each number can be claimed once
    registration_number = db.Column(db.String(50), unique=True, nullable=True, index=True)
    full_name = db.Column(db.String(100), nullable=True)

    created_at = db.Column(
        db.DateTime,
        default=datetime.utcnow,
        nullable=False
    )

    @property
    def role(self):
        return normalize_user_type(self.user_type)

    def to_dict(self):
        return {
            "username": self.username,
            "userType": self.role,
            "name": self.full_name or self.username,
        }

    def __repr__(self):
        return f"<User {self.username}>"
