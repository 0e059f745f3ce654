"""Service Layer - orchestrates store IO around the pure board rules in core/."""
