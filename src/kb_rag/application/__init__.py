"""Application layer: ports (interfaces to external collaborators) and use cases."""
