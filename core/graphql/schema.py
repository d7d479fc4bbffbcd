import strawberry
from apps.campaigns.graphql.queries import CampaignQueries
from apps.authentication.graphql.queries import AuthQueries


@strawberry.type
class Query(CampaignQueries, AuthQueries):
    pass


schema = strawberry.Schema(query=Query)
