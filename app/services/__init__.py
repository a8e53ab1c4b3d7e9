"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Services convert entities into response schemas and raise HTTP errors;
database access goes through the repositories.
"""
