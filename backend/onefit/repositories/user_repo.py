# onefit/repositories/user_repo.py
from __future__ import annotations
from typing import Optional

from sqlalchemy.exc import IntegrityError

from onefit.models import User
from onefit.repositories.base import BaseRepository

PROFILE_FIELDS = ("name", "height", "weight")
SETTINGS_FIELDS = ("goals", "settings")

class UserRepository(BaseRepository[User]):
    model = User

    # READS
    def get(self, user_id: int) -> Optional[User]:
        return self.get_live(user_id)

    def get_by_external_uid(self, external_uid: str) -> Optional[User]:
        stmt = self.live().where(User.external_uid == external_uid)
        return self.db.execute(stmt).scalar_one_or_none()

    # WRITES
    def get_or_create(self, *, external_uid: str, email: str | None, name: str | None) -> User:
        """First sight of an identity creates its local profile row."""
        user = self.get_by_external_uid(external_uid)
        if user:
            return user
        user = User(external_uid=external_uid, email=email, name=(name or email or "").strip())
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            return user
        except IntegrityError:
            # Another request created it first
            self.db.rollback()
            existing = self.get_by_external_uid(external_uid)
            if existing is None:
                raise
            return existing

    def apply(self, user: User, changes: dict, *, fields: tuple[str, ...]) -> User:
        for key in fields:
            if key in changes:
                setattr(user, key, changes[key])
        self.db.flush()
        return user
