import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.database import run_query
from jobly.errors import DuplicateError, NotFoundError, UnauthorizedError
from jobly.schemas.user import UserRegister
from jobly.utils.security import hash_password, verify_password

logger = logging.getLogger("jobly.users")

USER_COLUMNS = (
    'username, first_name AS "firstName", last_name AS "lastName", '
    'email, is_admin AS "isAdmin"'
)


def _to_user(row: dict) -> dict:
    row["isAdmin"] = bool(row["isAdmin"])
    return row


class UserService:
    def authenticate(self, db: Session, username: str, password: str) -> dict:
        rows = run_query(
            db, f"SELECT {USER_COLUMNS}, password FROM users WHERE username = $1", [username]
        )
        if rows:
            user = rows[0]
            stored_hash = user.pop("password")
            if verify_password(stored_hash, password):
                return _to_user(user)

        logger.info("Failed login for %s", username)
        raise UnauthorizedError("Invalid username/password")

    def register(self, db: Session, data: UserRegister, is_admin: bool = False) -> dict:
        duplicate = run_query(
            db, "SELECT username FROM users WHERE username = $1", [data.username]
        )
        if duplicate:
            raise DuplicateError(f"Duplicate username: {data.username}")

        try:
            rows = run_query(
                db,
                f"""INSERT INTO users
                        (username, password, first_name, last_name, email, is_admin)
                    VALUES ($1, $2, $3, $4, $5, $6)
                    RETURNING {USER_COLUMNS}""",
                [
                    data.username,
                    hash_password(data.password),
                    data.first_name,
                    data.last_name,
                    data.email,
                    is_admin,
                ],
            )
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise DuplicateError(f"Duplicate username: {data.username}") from exc

        logger.info("Registered user %s (admin=%s)", data.username, is_admin)
        return _to_user(rows[0])

    def get(self, db: Session, username: str) -> dict:
        rows = run_query(db, f"SELECT {USER_COLUMNS} FROM users WHERE username = $1", [username])
        if not rows:
            raise NotFoundError(f"No user: {username}")
        return _to_user(rows[0])

    def remove(self, db: Session, username: str) -> None:
        rows = run_query(
            db, "DELETE FROM users WHERE username = $1 RETURNING username", [username]
        )
        db.commit()
        if not rows:
            raise NotFoundError(f"No user: {username}")


user_service = UserService()
