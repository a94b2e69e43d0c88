"""API Schemas — request validation and response shapes, one module per resource."""
