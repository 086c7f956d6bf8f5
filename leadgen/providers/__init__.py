"""External lead providers."""

from leadgen.providers.apollo import ApolloLeadProvider, create_apollo_provider
from leadgen.providers.base import LeadProvider

__all__ = ["ApolloLeadProvider", "LeadProvider", "create_apollo_provider"]
