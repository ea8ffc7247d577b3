"""Service layer: catalog fetching, document storage and model routing."""
