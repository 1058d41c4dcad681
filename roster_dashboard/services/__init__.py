"""Remote access: GraphQL transport, paginated queries and roster use-cases."""
