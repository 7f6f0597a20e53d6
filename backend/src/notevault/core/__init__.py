"""Core domain: models, repositories, schemas and services."""
