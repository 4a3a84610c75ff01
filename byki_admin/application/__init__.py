"""Application layer: DTOs and cross-domain services (no HTTP dependency)."""
