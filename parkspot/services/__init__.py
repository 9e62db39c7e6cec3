"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Services enforce marketplace rules (ownership, roles, pricing, booking
conflicts) and call repositories for database access.
"""
