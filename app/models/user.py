from beanie import Document, Indexed


# ---------- User Model ----------
# Mirrors the Clerk user; clerkId is the only key the webhooks ever match on.
class User(Document):
    clerkId: Indexed(str, unique=True)
    firstName: str = ""
    lastName: str = ""
    avatar: str = ""
    email: str = ""
    username: str = ""

    class Settings:
        name = "users"
