"""레포지토리 패키지 — 레코드 저장소 조회 계층.

Repository package — Record store query layer.
Every entity repository extends PaginatedRepository and is configured with
its entity name, default sort, sortable fields and joins.
"""
