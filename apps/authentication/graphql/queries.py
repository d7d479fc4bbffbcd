import strawberry
from typing import List
from apps.authentication.models import User
from core.graphql.permissions import IsAuthenticated
from .types import UserType


@strawberry.type
class AuthQueries:

    @strawberry.field(permission_classes=[IsAuthenticated])
    def me(self, info: strawberry.Info) -> UserType:
        return info.context.request.user

    @strawberry.field(permission_classes=[IsAuthenticated])
    def users(self) -> List[UserType]:
        return User.objects.all()
