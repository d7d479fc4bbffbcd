from typing import Any
import strawberry
from strawberry.permission import BasePermission


class IsAuthenticated(BasePermission):
    message = "User is not authenticated"

    def has_permission(self, source: Any, info: strawberry.Info, **kwargs) -> bool:
        user = getattr(info.context.request, 'user', None)
        return bool(user and user.is_authenticated)
