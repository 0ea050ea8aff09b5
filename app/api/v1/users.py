"""User management API endpoints."""

from typing import Any

from fastapi import APIRouter, Query

from app.core.deps import ACCOUNT_GUARDS, ROOT_ADMIN_GUARDS, Credentials, Users
from app.core.exceptions import NotFoundError
from app.schemas.auth import ChangePassword
from app.schemas.paging import PagedResponse
from app.schemas.user import (
    USERNAME_PATTERN,
    MessageResponse,
    UserCreate,
    UserQueryParams,
    UserSelfUpdate,
    UserUpdate,
)
from app.services.user_service import SELF_FIELDS

router = APIRouter()


@router.get("", response_model=PagedResponse, dependencies=ROOT_ADMIN_GUARDS)
async def get_users(
    users: Users,
    username: str | None = Query(None, pattern=USERNAME_PATTERN),
    is_active: bool | None = Query(None, alias="isActive"),
    role: str | None = Query(None, pattern=USERNAME_PATTERN),
    fields: str | None = Query(None),
    sort: str | None = Query(None),
    limit: int = Query(20, ge=1),
    page: int = Query(1, ge=1),
) -> PagedResponse:
    """
    Search users with pagination.

    - **username**: Case-insensitive substring of the username
    - **isActive**: Filter by activation state
    - **role**: Only users holding this role
    - **fields**: Space or comma separated projection, `-field` excludes
    - **sort**: Space or comma separated sort fields, `-field` for descending
    - **limit**: Items per page
    - **page**: Page number (1-based)
    """
    params = UserQueryParams(
        username=username,
        is_active=is_active,
        role=role,
        fields=fields,
        sort=sort,
        limit=limit,
        page=page,
    )
    return await users.list_users(params)


@router.get("/my", dependencies=ACCOUNT_GUARDS)
async def get_my_user(
    auth: Credentials,
    users: Users,
) -> dict[str, Any]:
    """Get the caller's own username and email."""
    user = await users.find_by_id(auth.user.id, users.fields_adapter(SELF_FIELDS))

    if not user:
        raise NotFoundError("Document not found. That is strange.")

    return user


@router.get("/{user_id}", dependencies=ROOT_ADMIN_GUARDS)
async def get_user(
    user_id: str,
    users: Users,
) -> dict[str, Any]:
    """Get user by ID."""
    user = await users.find_by_id(user_id)

    if not user:
        raise NotFoundError()

    return user


@router.post("", dependencies=ROOT_ADMIN_GUARDS)
async def create_user(
    data: UserCreate,
    users: Users,
) -> dict[str, Any]:
    """
    Create user.

    - **username**: Unique username (letters, digits, underscore)
    - **password**: Initial password
    - **email**: Unique email address
    """
    await users.ensure_available(data.username, data.email)
    return await users.create_user(data.username, data.password, data.email)


@router.put("/my", dependencies=ACCOUNT_GUARDS)
async def update_my_user(
    data: UserSelfUpdate,
    auth: Credentials,
    users: Users,
) -> dict[str, Any]:
    """
    Update the caller's own username and email.

    - **username**: New username
    - **email**: New email address
    """
    user_id = auth.user.id
    await users.ensure_available(data.username, data.email, exclude_id=user_id)
    user = await users.update_user(
        user_id,
        {"username": data.username, "email": data.email},
        users.fields_adapter(SELF_FIELDS),
    )

    if not user:
        raise NotFoundError("Document not found. That is strange.")

    return user


@router.put("/my/password", dependencies=ACCOUNT_GUARDS)
async def change_my_password(
    data: ChangePassword,
    auth: Credentials,
    users: Users,
) -> dict[str, Any]:
    """
    Change the caller's own password.

    - **password**: New password
    """
    user = await users.set_password(
        auth.user.id,
        data.password,
        users.fields_adapter(SELF_FIELDS),
    )

    if not user:
        raise NotFoundError("Document not found. That is strange.")

    return user


@router.put("/{user_id}", dependencies=ROOT_ADMIN_GUARDS)
async def update_user(
    user_id: str,
    data: UserUpdate,
    users: Users,
) -> dict[str, Any]:
    """
    Update user.

    - **user_id**: User ID to update
    - **isActive**: Activation state
    - **username**: New username
    - **email**: New email address
    """
    await users.ensure_available(data.username, data.email, exclude_id=user_id)
    user = await users.update_user(
        user_id,
        {
            "is_active": data.is_active,
            "username": data.username,
            "email": data.email,
        },
    )

    if not user:
        raise NotFoundError()

    return user


@router.put("/{user_id}/password", dependencies=ROOT_ADMIN_GUARDS)
async def change_password(
    user_id: str,
    data: ChangePassword,
    users: Users,
) -> dict[str, Any]:
    """
    Change user password.

    - **user_id**: User ID to change password for
    - **password**: New password
    """
    user = await users.set_password(user_id, data.password)

    if not user:
        raise NotFoundError()

    return user


@router.delete("/{user_id}", response_model=MessageResponse, dependencies=ROOT_ADMIN_GUARDS)
async def delete_user(
    user_id: str,
    users: Users,
) -> MessageResponse:
    """
    Delete user.

    - **user_id**: User ID to delete
    """
    count = await users.remove_user(user_id)

    if count == 0:
        raise NotFoundError()

    return MessageResponse(message="Success.")
