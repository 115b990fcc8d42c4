"""Pure domain services: shipping, pricing and the status transition table."""
