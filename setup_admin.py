from dotenv import load_dotenv
load_dotenv()

from auth.auth_utils import hash_password
from database import ensure_indexes, db, users_collection

DEMO_USERS = [
    {"name": "Admin User", "email": "admin@degreefyd.com", "password": "admin123", "role": "admin"},
    {"name": "Student User", "email": "student@degreefyd.com", "password": "student123", "role": "student"},
]

ensure_indexes(db)

# Check existing users
users = list(users_collection.find({}, {'_id': 0, 'password': 0}))
print("=== EXISTING USERS ===")
if users:
    for user in users:
        print(f"  Email: {user['email']}, Role: {user['role']}")
else:
    print("  No users found")

for demo in DEMO_USERS:
    if users_collection.find_one({"email": demo["email"]}):
        print(f"\n✓ {demo['role'].title()} user already exists: {demo['email']}")
        continue

    users_collection.insert_one({
        "name": demo["name"],
        "email": demo["email"],
        "password": hash_password(demo["password"]),
        "role": demo["role"],
    })
    print(f"\n✓ {demo['role'].title()} created successfully!")
    print(f"  Email: {demo['email']}")
    print(f"  Password: {demo['password']}")
