"""Business logic used by the API routers and scripts."""
