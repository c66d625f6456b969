"""
Pydantic request/response schemas (the API contract), kept separate from the
SQLAlchemy models so the stored columns and the exposed fields can differ.
"""
