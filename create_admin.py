import os
import sys
from datetime import timedelta
from dotenv import load_dotenv
from sqlalchemy import select
from sqlalchemy.orm import Session
import uuid

# Add the project root to path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

# Load environment variables
load_dotenv()

from app.core.security import create_access_token
from app.models.profile import Profile


def create_admin_profile(db: Session, username: str, email: str, edipi: str) -> Profile:
    """Create an admin profile if it doesn't exist, otherwise promote the existing one."""
    profile = db.execute(select(Profile).filter(Profile.username == username)).scalars().first()
    if profile:
        if not profile.is_admin:
            profile.is_admin = True
            db.commit()
            print(f"Profile {username} promoted to admin.")
        else:
            print(f"Admin profile {username} already exists.")
        return profile

    admin_profile = Profile(
        id=uuid.uuid4(),
        edipi=edipi,
        username=username,
        email=email,
        is_admin=True,
    )

    db.add(admin_profile)
    db.commit()
    db.refresh(admin_profile)

    print(f"Admin profile created with username: {username}")
    return admin_profile


if __name__ == "__main__":
    from app.db.session import SessionLocal

    # Get admin details
    admin_username = input("Enter admin username: ")
    admin_email = input("Enter admin email: ")
    admin_edipi = input("Enter admin EDIPI: ")

    # Create database session
    db = SessionLocal()

    try:
        profile = create_admin_profile(db, admin_username, admin_email, admin_edipi)
        token = create_access_token(subject=profile.id, expires_delta=timedelta(days=1))
        print(f"Access token (valid 24h): {token}")
    finally:
        db.close()
