# Services package init
"""
Developer Registry — Services Layer
=====================================

Service Inventory:
    - LevelService:      level CRUD, live developer counts, delete guard
    - DeveloperService:  developer CRUD, validation, level-name enrichment
    - derived:           age, birth-date parsing, level display name
    - query_engine:      stable sort, substring filter, sort toggling

Every service method receives the AsyncSession to use; none holds a
connection of its own.
"""
