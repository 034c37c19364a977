"""Record store implementations consumed by the services."""
