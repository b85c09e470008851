"""
Create a user (e.g. the first admin). Run from project root:
  python -m src.scripts.create_user EMAIL PASSWORD [role]
Example:
  python -m src.scripts.create_user admin@example.com your-secure-password admin
"""
import argparse
import asyncio
import sys

from sqlmodel import SQLModel

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.auth import RegisterCommand, RegisterUseCase
from src.depends import AsyncSessionLocal, engine, get_password_hasher
from src.domain.entities import UserRole


async def create_user(email: str, password: str, role: str) -> int:
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with AsyncSessionLocal() as session:
        use_case = RegisterUseCase(SqlAlchemyUnitOfWork(session), get_password_hasher())
        result = await use_case.execute(
            RegisterCommand(email=email, password=password, role=role)
        )

    await engine.dispose()

    if result.is_err():
        print(result.error.message, file=sys.stderr)
        return 1

    print(f"Created user '{result.value.email}' with role '{result.value.role}'.")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create a CMS user account.")
    parser.add_argument("email", help="Login email")
    parser.add_argument("password", help="Password")
    parser.add_argument(
        "role", nargs="?", default=UserRole.user.value, choices=UserRole.values()
    )
    args = parser.parse_args(argv)

    return asyncio.run(create_user(args.email, args.password, args.role))


if __name__ == "__main__":
    sys.exit(main())
