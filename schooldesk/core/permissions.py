# core/permissions.py
"""
Role based access rules.

Every route asks one question before touching the database: may this caller
perform this action on this kind of resource, in this school, on a row owned
by this user? ``is_allowed`` answers it without side effects so the rules can
be tested on their own; ``authorize`` turns a "no" into an API error.
"""
from enum import Enum
from typing import Any, Optional, Union

from schooldesk.core.errors import AuthenticationError, PermissionDenied
from schooldesk.core.logging import logger
from schooldesk.models.user import User
from schooldesk.schemas.user.role import UserRoleEnum


class Action(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


class Resource(str, Enum):
    SCHOOL = "school"
    USER = "user"
    CLASS = "class"
    STUDENT = "student"
    ENROLLMENT = "enrollment"
    ATTENDANCE = "attendance"
    GRADE = "grade"


# Resources a school admin fully manages inside their school
SCHOOL_ADMIN_MANAGED = {
    Resource.CLASS,
    Resource.STUDENT,
    Resource.ENROLLMENT,
    Resource.ATTENDANCE,
    Resource.GRADE,
}

# Resources a teacher may write, limited to classes they teach
TEACHER_WRITABLE = {Resource.ATTENDANCE, Resource.GRADE}

# Resources a teacher may read when they own the class
TEACHER_OWNED_READS = {Resource.CLASS, Resource.ENROLLMENT, Resource.ATTENDANCE, Resource.GRADE}

# Default scope for checks that do not target a school, e.g. creating a school.
# An explicit school_id=None means the row has no school.
UNSCOPED = object()


def _role(value: Union[UserRoleEnum, str, None]) -> Optional[UserRoleEnum]:
    if value is None:
        return None
    try:
        return UserRoleEnum(value)
    except ValueError:
        return None


def _same_school(caller: User, school_id) -> bool:
    if caller.school_id is None:
        return False
    if school_id is UNSCOPED:
        return True
    # A row detached from its school belongs to nobody but super admins
    return school_id == caller.school_id


def is_allowed(
    caller: Optional[User],
    action: Action,
    resource: Resource,
    *,
    school_id: Any = UNSCOPED,
    owner_id: Optional[int] = None,
    target_role: Union[UserRoleEnum, str, None] = None,
) -> bool:
    """
    Decide whether ``caller`` may perform ``action`` on ``resource``.

    Args:
        caller: authenticated profile, or None for anonymous requests
        school_id: school the targeted row belongs to; None for a row
            without a school, left out when no school is targeted
        owner_id: teacher id of the class the row hangs off, when relevant
        target_role: role of the user being created, changed or removed
    """
    if caller is None:
        return False

    role = _role(caller.role)

    if role == UserRoleEnum.SUPER_ADMIN:
        return True

    if role == UserRoleEnum.SCHOOL_ADMIN:
        if not _same_school(caller, school_id):
            return False
        if resource == Resource.SCHOOL:
            return action == Action.READ
        if resource == Resource.USER:
            if action == Action.READ:
                return True
            return _role(target_role) == UserRoleEnum.TEACHER
        return resource in SCHOOL_ADMIN_MANAGED

    if role == UserRoleEnum.TEACHER:
        if not _same_school(caller, school_id):
            return False
        if resource == Resource.SCHOOL:
            return action == Action.READ
        if resource == Resource.STUDENT:
            return action == Action.READ
        if resource == Resource.USER:
            return action == Action.READ and owner_id == caller.id
        if action == Action.READ and resource in TEACHER_OWNED_READS:
            return owner_id == caller.id
        if resource in TEACHER_WRITABLE:
            return owner_id == caller.id
        return False

    return False


def authorize(
    caller: Optional[User],
    action: Action,
    resource: Resource,
    **scope,
) -> None:
    """Raise unless ``is_allowed`` grants the request"""
    if caller is None:
        raise AuthenticationError()
    if not is_allowed(caller, action, resource, **scope):
        logger.warning(
            f"Permission denied: user {caller.id} ({caller.role}) "
            f"attempted {action.value} on {resource.value} with scope {scope}"
        )
        raise PermissionDenied(f"Not authorized to {action.value} {resource.value}")
