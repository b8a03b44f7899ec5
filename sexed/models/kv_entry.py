from datetime import datetime

from sexed.extensions import db


class KVEntry(db.Model):
    """One JSON document per key; ``version`` guards read-modify-write cycles."""

    __tablename__ = "kv_store"

    key = db.Column(db.String(255), primary_key=True)
    value = db.Column(db.JSON, nullable=True)
    version = db.Column(db.Integer, nullable=False, default=1)

    updated_at = db.Column(
        db.DateTime,
        default=datetime.utcnow,
        nullable=False
    )

    def __repr__(self):
        return f"<KVEntry {self.key} v{self.version}>"
