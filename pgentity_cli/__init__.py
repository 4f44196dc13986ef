"""pgentity-cli: ORM entity generation from PostgreSQL catalogs."""

__version__ = "0.1.0"
