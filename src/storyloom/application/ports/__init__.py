"""Application ports - interfaces for external adapters."""

from storyloom.application.ports.avatar_storage import AvatarStorage
from storyloom.application.ports.change_notifier import ChangeNotifier
from storyloom.application.ports.content_store import ContentStore
from storyloom.application.ports.permission_checker import PermissionChecker
from storyloom.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "AvatarStorage",
    "ChangeNotifier",
    "ContentStore",
    "PermissionChecker",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
