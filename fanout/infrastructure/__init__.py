"""Infrastructure adapters: persistence, rate limiting, gateway and security."""
