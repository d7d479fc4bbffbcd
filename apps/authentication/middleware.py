from django.contrib.auth.models import AnonymousUser
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken, AuthenticationFailed


class GraphQLJWTMiddleware:
    """Resolve the bearer token for /graphql/ requests.

    DRF views authenticate on their own; the GraphQL view is a plain Django
    view and only sees what the middleware stack puts on request.user.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if request.path.startswith('/graphql/'):
            token = self.get_token_from_request(request)
            if token:
                auth = JWTAuthentication()
                try:
                    validated_token = auth.get_validated_token(token)
                    request.user = auth.get_user(validated_token)
                except (InvalidToken, AuthenticationFailed):
                    # Resolvers reject anonymous users
                    request.user = AnonymousUser()

        return self.get_response(request)

    def get_token_from_request(self, request):
        header = request.META.get('HTTP_AUTHORIZATION')
        if header and header.startswith('Bearer '):
            return header.split(' ')[1].encode('utf-8')
        return None
