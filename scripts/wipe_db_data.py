from dev_profiles.database import SessionLocal
from dev_profiles.models import Post, Profile, User

def reset_db():
    db = SessionLocal()
    try:
        print("Cleaning up database records...")

        # Children before the users they reference
        deleted_posts = db.query(Post).delete()
        print(f"Deleted {deleted_posts} posts.")

        deleted_profiles = db.query(Profile).delete()
        print(f"Deleted {deleted_profiles} profiles.")

        deleted_users = db.query(User).delete()
        print(f"Deleted {deleted_users} users.")

        db.commit()
        print("Database cleanup complete. You have a clean slate.")
    except Exception as e:
        print(f"Error resetting database: {e}")
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == "__main__":
    reset_db()
