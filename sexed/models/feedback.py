from datetime import datetime

from sexed.extensions import db


class Feedback(db.Model):
    """Anonymous-friendly platform feedback; ``email`` only when the sender leaves one."""

    __tablename__ = "feedback"

    id = db.Column(db.Integer, primary_key=True)
    category = db.Column(db.String(50), nullable=False, default="general")
    feedback = db.Column(db.Text, nullable=False)
    email = db.Column(db.String(120), nullable=True)

    created_at = db.Column(
        db.DateTime,
        default=datetime.utcnow,
        nullable=False
    )

    def to_dict(self):
        return {
            "id": self.id,
            "category": self.category,
            "feedback": self.feedback,
            "email": self.email,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<Feedback {self.id} {self.category}>"
