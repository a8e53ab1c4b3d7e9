"""레포지토리 패키지 — 데이터베이스 쿼리 계층.

Repository package — Database query layer.
Repositories are stateless singletons that take the caller's AsyncSession;
member search and paging queries live in member_repository.
"""
