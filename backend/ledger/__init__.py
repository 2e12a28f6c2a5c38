"""Device registry and repair tracking ledger."""
