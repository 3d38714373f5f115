from lira_portal.database import SessionLocal, engine, Base
from lira_portal.auth import get_password_hash
from lira_portal.models import Activity, Comment, Department, Profile

# Create tables
Base.metadata.create_all(bind=engine)

db = SessionLocal()

# Clear existing data
db.query(Comment).delete()
db.query(Activity).delete()
db.query(Profile).delete()
db.query(Department).delete()

departments = [
    Department(name="Business Administration", description="Management, finance and marketing placements"),
    Department(name="Computer Science", description="Software development and IT support placements"),
    Department(name="Education", description="Teaching practice and school administration"),
    Department(name="Health Sciences", description="Clinical and community health placements"),
]
db.add_all(departments)
db.flush()

admin = Profile(
    email="admin@lira.ac.ug",
    hashed_password=get_password_hash("changeme123"),
    full_name="Portal Admin",
    role="admin",
)
staff = Profile(
    email="supervisor@lira.ac.ug",
    hashed_password=get_password_hash("changeme123"),
    full_name="Grace Supervisor",
    role="staff",
    department_id=departments[1].id,
)
intern = Profile(
    email="intern@lira.ac.ug",
    hashed_password=get_password_hash("changeme123"),
    full_name="Sam Intern",
    role="intern",
    department_id=departments[1].id,
    student_id="LU/2024/001",
)
db.add_all([admin, staff, intern])
db.flush()

activities = [
    Activity(
        user_id=intern.id,
        title="Login page redesign",
        content="Rebuilt the login form and added client-side validation.",
        status="approved",
        reviewed_by=staff.id,
    ),
    Activity(
        user_id=intern.id,
        title="Database backup script",
        content="Wrote a nightly backup script for the records database.",
        status="pending",
    ),
]
db.add_all(activities)
db.flush()

db.add(Comment(activity_id=activities[0].id, user_id=staff.id, content="Good work, well documented."))
db.commit()

print("Database seeded successfully!")
print(f"  - {len(departments)} departments")
print("  - 3 profiles (admin, staff, intern), password: changeme123")
print(f"  - {len(activities)} activities")

db.close()
