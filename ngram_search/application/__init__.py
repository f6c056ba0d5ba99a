"""Application layer: search services, interfaces, and DTOs."""
