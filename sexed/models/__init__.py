from sexed.models.feedback import Feedback
from sexed.models.kv_entry import KVEntry
from sexed.models.student import Student
from sexed.models.user import User

__all__ = ["Feedback", "KVEntry", "Student", "User"]
