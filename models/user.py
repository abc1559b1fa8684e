"""User model definition."""

from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from . import db, utcnow


USER_ROLES = ("consumer", "provider")
ROLE_ALIASES = {
    "consumer": "consumer",
    "user": "consumer",
    "provider": "provider",
    "artisan": "provider",
}


def normalize_role(raw_role: Optional[str]) -> Optional[str]:
    """Map a client-supplied role onto a stored role, or ``None`` if unknown."""

    return ROLE_ALIASES.get((raw_role or "").strip().lower())


class User(db.Model):
    """Represents a platform user, either a consumer or a provider."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    phone = db.Column(db.String(32), unique=True, nullable=False, index=True)
    email = db.Column(db.String(255), nullable=True)
    role = db.Column(
        db.Enum(*USER_ROLES, name="user_role"),
        nullable=False,
        default="consumer",
    )
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    artisan_profile = db.relationship(
        "ArtisanProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )

    @property
    def is_provider(self) -> bool:
        return self.role == "provider"

    def set_password(self, password: str) -> None:
        """Hash and store the password."""

        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""

        return check_password_hash(self.password_hash, password)

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "phone": self.phone, "role": self.role}

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.phone}>"
