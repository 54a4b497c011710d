from werkzeug.security import check_password_hash, generate_password_hash

from nexus_cms.domain.permissions import WILDCARD
from nexus_cms.extensions import db
from .base import BaseModel, SecureIdMixin

user_permissions = db.Table(
    "user_permissions",
    db.Column("user_id", db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    db.Column("permission_id", db.Integer, db.ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True),
)

user_roles = db.Table(
    "user_roles",
    db.Column("user_id", db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    db.Column("role_id", db.Integer, db.ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)

role_permissions = db.Table(
    "role_permissions",
    db.Column("role_id", db.Integer, db.ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
    db.Column("permission_id", db.Integer, db.ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True),
)


class Permission(BaseModel):
    __tablename__ = "permissions"

    name = db.Column(db.String(100), unique=True, nullable=False)

    @classmethod
    def get_or_create(cls, name):
        permission = cls.query.filter_by(name=name).first()
        if permission is None:
            permission = cls(name=name)
            db.session.add(permission)
        return permission


class Role(BaseModel):
    __tablename__ = "roles"

    name = db.Column(db.String(100), unique=True, nullable=False)
    permissions = db.relationship("Permission", secondary=role_permissions, lazy="selectin")


class User(BaseModel, SecureIdMixin):
    __tablename__ = "users"

    not_found_message = "Admin not found"

    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    profile_image = db.Column(db.String(255), nullable=True)
    bio = db.Column(db.Text, nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    email_verification_code = db.Column(db.String(6), nullable=True)
    email_verification_expires_at = db.Column(db.DateTime(timezone=True), nullable=True)

    permissions = db.relationship("Permission", secondary=user_permissions, lazy="selectin")
    roles = db.relationship("Role", secondary=user_roles, lazy="selectin")

    @property
    def password(self):
        raise AttributeError("password is write-only")

    @password.setter
    def password(self, value):
        self.set_password(value)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def permission_names(self) -> set:
        """Direct permissions plus everything granted through roles."""
        names = {p.name for p in self.permissions}
        for role in self.roles:
            names.update(p.name for p in role.permissions)
        return names

    def role_names(self) -> list:
        return sorted(role.name for role in self.roles)

    @property
    def is_super_admin(self) -> bool:
        return WILDCARD in self.permission_names()


class TokenBlocklist(BaseModel):
    __tablename__ = "token_blocklist"

    jti = db.Column(db.String(64), nullable=False, unique=True, index=True)
