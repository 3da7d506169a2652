import logging
from typing import List, Optional, Sequence
from beanie import UpdateResponse
from beanie.operators import Set
from fastapi import HTTPException
from app.models.user import User
from app.models.webhook import EmailAddress
from app.custom_error import PersistenceFailure
from app.utils.db import ensure_db_initialized

logger = logging.getLogger("uvicorn.error")


def first_email(email_addresses: Sequence[EmailAddress]) -> str:
    return email_addresses[0].email if email_addresses else ""


class UserReconciler:
    """Owns every write to the users collection."""

    @classmethod
    async def create_or_update(
        cls,
        id: str,
        first_name: str,
        last_name: str,
        image_url: str,
        email_addresses: List[EmailAddress],
        username: str,
    ) -> Optional[User]:
        """Upsert the user keyed by clerkId, overwriting every stored field.

        Runs as one find_one_and_update with upsert so redelivered events
        converge on the same document instead of racing an exists-check.
        """
        try:
            await ensure_db_initialized()

            user = await User.find_one({"clerkId": id}).update(
                Set({
                    "firstName": first_name,
                    "lastName": last_name,
                    "avatar": image_url,
                    "email": first_email(email_addresses),
                    "username": username,
                }),
                upsert=True,
                response_type=UpdateResponse.NEW_DOCUMENT,
            )
            logger.info(f"🔁 Created or updated user: {id}")
            return user

        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"❌ Error in create_or_update for {id}: {repr(e)}")
            raise PersistenceFailure("Failed to create or update user") from e

    @classmethod
    async def delete(cls, id: str) -> bool:
        """Remove the user keyed by clerkId. A missing user is not an error."""
        try:
            await ensure_db_initialized()

            result = await User.find_one({"clerkId": id}).delete()
            deleted = bool(result and result.deleted_count)
            if deleted:
                logger.info(f"🗑️ Deleted user: {id}")
            else:
                logger.info(f"ℹ️ No user to delete for: {id}")
            return deleted

        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"❌ Error deleting user {id}: {repr(e)}")
            raise PersistenceFailure("Failed to delete user") from e
