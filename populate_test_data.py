"""
Populate sample data for local development and dashboard testing
Run from backend directory:
python populate_test_data.py
"""
from sexed.extensions import db
from sexed.models.student import Student
from sexed.routes.community import CHANNELS_KEY, default_channels
from sexed.routes.modules import MODULES_KEY
from sexed.routes.resources import RESOURCES_KEY
from sexed.utils import kv_store
from sexed.utils.records import generate_id, utc_now_iso
from run import app

TEST_STUDENTS = [
    {"registration_number": "SCT211-0001/2021", "name": "Amina Wanjiru"},
    {"registration_number": "SCT211-0002/2021", "name": "Brian Otieno"},
    {"registration_number": "SCT211-0003/2021", "name": "Cynthia Mwangi"},
    {"registration_number": "SCT211-0004/2021", "name": "David Kiprop"},
    {"registration_number": "SCT211-0005/2021", "name": "Esther Njeri"},
]


def create_test_students():
    with app.app_context():
        for data in TEST_STUDENTS:
            student = Student.query.filter_by(
                registration_number=data["registration_number"]
            ).first()
            if student:
                print(f"✓ Student exists: {student.registration_number}")
                continue

            db.session.add(Student(**data))
            print(f"✓ Created student: {data['registration_number']}")

        db.session.commit()


def create_test_content():
    with app.app_context():
        if not kv_store.get(CHANNELS_KEY):
            kv_store.set(CHANNELS_KEY, default_channels())
            print("✓ Community channels seeded")

        if not kv_store.get(RESOURCES_KEY):
            kv_store.set(RESOURCES_KEY, [{
                "id": generate_id(),
                "title": "Understanding Contraception",
                "description": "An overview of contraceptive methods and their effectiveness.",
                "type": "Articles",
                "category": "Contraception",
                "url": "https://www.who.int/news-room/fact-sheets/detail/family-planning-contraception",
                "uploadedBy": "system",
                "createdAt": utc_now_iso(),
            }])
            print("✓ Sample resource created")

        if not kv_store.get(MODULES_KEY):
            kv_store.set(MODULES_KEY, [{
                "id": generate_id(),
                "title": "STI Basics",
                "description": "How common STIs spread and how to prevent them.",
                "category": "STIs",
                "duration": "30 min",
                "difficulty": "Beginner",
                "contentType": "link",
                "contentUrl": "https://www.cdc.gov/sti/",
                "uploadedBy": "system",
                "createdAt": utc_now_iso(),
            }])
            print("✓ Sample module created")


if __name__ == "__main__":
    print("\nPOPULATING TEST DATA...\n")
    with app.app_context():
        db.create_all()
    create_test_students()
    create_test_content()
    print("\n✅ DONE\n")
