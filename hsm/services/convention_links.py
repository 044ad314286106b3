"""
Convention Link Service
Manages which conventions apply to which users
"""
import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hsm.error_handlers.exceptions import (
    AuthorizationException,
    ConflictException,
    PreconditionFailedException,
    ResourceNotFoundException,
    ValidationException,
)
from hsm.models.convention import SelectionType

from .repositories import ConventionRepository, UserRepository

logger = logging.getLogger(__name__)


class ConventionLinkService:
    """
    Links conventions to users

    Administrators assign conventions (ADMIN_ASSIGNED) and can remove any
    link; staff select conventions for themselves (USER_SELECTED) and can
    only remove those.
    """

    def __init__(self, db_session: Session, models: dict):
        self.db = db_session
        self.users = UserRepository(db_session, models)
        self.conventions = ConventionRepository(db_session, models)

    def _load_staff_user(self, user_id: str, self_service: bool) -> object:
        user = self.users.find_by_id(user_id)
        if not user:
            raise ResourceNotFoundException('User not found')

        if not user.is_active:
            if self_service:
                raise PreconditionFailedException('Your account is inactive. Please contact an administrator.')
            raise PreconditionFailedException('Cannot assign conventions to inactive user')

        if user.is_admin:
            if self_service:
                raise PreconditionFailedException(
                    'Admin users cannot select conventions for themselves. Use admin assignment instead.'
                )
            raise PreconditionFailedException('Cannot assign conventions to admin users')

        return user

    def _link(self, user, convention_ids: List[str], selection_type: SelectionType,
              assigned_by_id: str) -> List[object]:
        if not isinstance(convention_ids, list) or not convention_ids:
            raise ValidationException('Please select at least one convention')

        unique_ids = list(dict.fromkeys(convention_ids))
        conventions = self.conventions.find_conventions(unique_ids)
        if len(conventions) != len(unique_ids):
            raise ResourceNotFoundException('One or more conventions not found')

        inactive = [c.title for c in conventions if not c.is_active]
        if inactive:
            raise PreconditionFailedException(f"Cannot link inactive conventions: {', '.join(inactive)}")

        new_ids = [cid for cid in unique_ids if not self.conventions.find_link(user.id, cid)]
        if not new_ids:
            if selection_type == SelectionType.USER_SELECTED:
                raise ConflictException('All selected conventions are already assigned to you')
            raise ConflictException('All conventions are already assigned to this user')

        try:
            links = [
                self.conventions.add_link(user.id, cid, selection_type.value, assigned_by_id)
                for cid in new_ids
            ]
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictException(
                'Convention is already assigned to this user',
                details={'constraint': 'unique_user_convention'}
            ) from e
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Linked {len(links)} convention(s) to {user.username} ({selection_type.value})")
        return links

    def assign_to_user(self, user_id: str, convention_ids: List[str], admin_id: str) -> List[object]:
        """Administrator links conventions to a staff member"""
        user = self._load_staff_user(user_id, self_service=False)
        return self._link(user, convention_ids, SelectionType.ADMIN_ASSIGNED, admin_id)

    def select_for_self(self, user_id: str, convention_ids: List[str]) -> List[object]:
        """Staff member links conventions to themselves"""
        user = self._load_staff_user(user_id, self_service=True)
        return self._link(user, convention_ids, SelectionType.USER_SELECTED, user_id)

    def _unlink(self, link) -> dict:
        convention = link.convention
        try:
            self.conventions.delete_link(link)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Removed convention \"{convention.title}\" from user {link.user_id}")
        return {'message': 'Convention removed successfully', 'convention': convention.to_dict()}

    def remove_from_user(self, user_id: str, convention_id: str) -> dict:
        """Administrator removes any link"""
        link = self.conventions.find_link(user_id, convention_id)
        if not link:
            raise ResourceNotFoundException('Convention assignment not found')
        return self._unlink(link)

    def remove_own(self, user_id: str, convention_id: str) -> dict:
        """Staff member removes a convention they selected themselves"""
        link = self.conventions.find_link(user_id, convention_id)
        if not link:
            raise ResourceNotFoundException('Convention assignment not found')

        if link.selection_type == SelectionType.ADMIN_ASSIGNED.value:
            raise AuthorizationException(
                f'Cannot remove admin-assigned convention "{link.convention.title}". '
                'Please contact an administrator.'
            )
        return self._unlink(link)

    def get_available(self) -> List[object]:
        """Conventions staff can choose from"""
        conventions = self.conventions.find_active()
        logger.debug(f"Found {len(conventions)} available conventions")
        return conventions

    def get_user_conventions(self, user_id: str) -> List[object]:
        if not self.users.find_by_id(user_id):
            raise ResourceNotFoundException('User not found')
        return self.conventions.find_for_user(user_id)

    def get_stats(self, user_id: str) -> dict:
        return {
            'total': self.conventions.count_links(user_id),
            'adminAssigned': self.conventions.count_links(user_id, SelectionType.ADMIN_ASSIGNED.value),
            'userSelected': self.conventions.count_links(user_id, SelectionType.USER_SELECTED.value),
        }
