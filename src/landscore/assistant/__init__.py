"""Assistant-facing tool registry and dispatcher."""
