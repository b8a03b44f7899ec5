from datetime import datetime

from sexed.extensions import db


class Student(db.Model):
    """Registration numbers issued by the university; signup checks against these."""

    __tablename__ = "students"

    id = db.Column(db.Integer, primary_key=True)
    registration_number = db.Column(db.String(50), unique=True, nullable=False, index=True)
    name = db.Column(db.String(100), nullable=True)

    created_at = db.Column(
        db.DateTime,
        default=datetime.utcnow,
        nullable=False
    )

    def to_dict(self):
        return {
            "registration_number": self.registration_number,
            "name": self.name,
        }

    def __repr__(self):
        return f"<Student {self.registration_number}>"
