"""Seed data loaded by happythoughts.services.seed."""
