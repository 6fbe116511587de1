"""Adapters turning other libraries' validation failures into error trees."""
