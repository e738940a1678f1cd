"""
User accounts: creation with a hashed password and role scoped lookup.

Passwords are hashed with Django's configured password hasher, which
salts every hash with fresh random bytes.
"""
from typing import Optional

from django.contrib.auth.hashers import check_password, make_password
from django.db import IntegrityError, transaction
from rest_framework.exceptions import ValidationError

from records.models import User

DUPLICATE_IDENTITY_MESSAGE = 'User with this ID already exists'


def format_user(user: User) -> dict:
    """Public representation of a user.  The password hash is never included."""
    return {
        'id': user.id,
        'role': user.role,
        'roleId': user.role_id,
        'name': user.name,
        'email': user.email or None,
        'phone': user.phone or None,
        'age': user.age,
        'createdAt': user.created_at,
    }


def create_user(*, role: str, role_id: str, password: str, name: str,
                email: str = '', phone: str = '', age: Optional[int] = None) -> User:
    """Hash the plaintext password and persist the user.

    Uniqueness of (role, role_id) is enforced by the database; callers
    that want a friendly error check :func:`get_user_by_role_id` first.
    """
    return User.objects.create(
        role=role,
        role_id=role_id,
        password=make_password(password),
        name=name,
        email=email or '',
        phone=phone or '',
        age=age,
    )


def get_user_by_role_id(role_id: str, role: str) -> Optional[User]:
    return User.objects.filter(role_id=role_id, role=role).first()


def get_user_by_id(user_id: str) -> Optional[User]:
    return User.objects.filter(id=user_id).first()


def register_user(**data) -> User:
    """Create a user unless one already holds the same role identity.

    The lookup gives a clear error in the common case; the unique
    constraint turns a concurrent duplicate insert into the same error.
    """
    if get_user_by_role_id(data['role_id'], data['role']):
        raise ValidationError(DUPLICATE_IDENTITY_MESSAGE)
    try:
        with transaction.atomic():
            return create_user(**data)
    except IntegrityError:
        raise ValidationError(DUPLICATE_IDENTITY_MESSAGE)


def authenticate_user(role_id: str, password: str, role: str) -> Optional[User]:
    """Return the user when the password matches, else ``None``.

    Unknown identities and wrong passwords are indistinguishable to the
    caller.
    """
    user = get_user_by_role_id(role_id, role)
    if not user:
        # Run the hasher anyway so a miss costs as much as a wrong password.
        make_password(password)
        return None
    if not check_password(password, user.password):
        return None
    return user
