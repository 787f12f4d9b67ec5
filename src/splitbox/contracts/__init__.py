"""JSON-schema contracts for messages and export manifests."""
