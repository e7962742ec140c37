"""Services Layer — repositories, association manager, facade, AI advisor.

Invariants:
    - Repositories flush but never commit; JournalService commits once per operation
    - Every service receives its AsyncSession explicitly (no ambient DB handle)

Design Decisions:
    - One file per component for locality
"""
