"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Services validate cross-record rules, call repositories with a record store,
and convert store rows into response schemas.
"""
