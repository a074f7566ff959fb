"""
Seed the first super agent account.

Example:
    python init_admin.py --email admin@example.com --password admin123
"""
import argparse
import asyncio

from sqlalchemy import select

from backoffice.db.models import Account
from backoffice.infrastructure.database import dispose_engine, get_session_factory, init_db
from backoffice.modules.accounts import SUPER_AGENT, AccountCreateInput, AccountService


async def create_default_admin(email: str, password: str, full_name: str) -> bool:
    await init_db()
    try:
        async with get_session_factory()() as db:
            stmt = select(Account.id).where(Account.role == SUPER_AGENT).limit(1)
            if (await db.execute(stmt)).scalar_one_or_none() is not None:
                print("A super agent account already exists; nothing to do")
                return False

            await AccountService.with_session(db).create_account(
                AccountCreateInput(email=email, password=password, role=SUPER_AGENT, full_name=full_name)
            )
            await db.commit()
    finally:
        await dispose_engine()

    print("=" * 50)
    print("Super agent account created")
    print(f"Email:    {email}")
    print(f"Password: {password}")
    print("Change the password after the first login!")
    print("=" * 50)
    return True


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the initial super agent account")
    parser.add_argument("--email", default="admin@example.com")
    parser.add_argument("--password", default="admin123")
    parser.add_argument("--full-name", default="Super Agent")
    args = parser.parse_args()
    asyncio.run(create_default_admin(args.email, args.password, args.full_name))


if __name__ == "__main__":
    main()
