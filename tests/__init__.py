"""
LifeQuest Test Suite
====================

Test Organization
-----------------
- tests/unit/          : Fast unit tests (no external dependencies)
- tests/unit/domain/   : Domain model tests

Testing Philosophy
------------------
- Unit tests: Fast, isolated, test business logic
- Use pytest markers to categorize and selectively run tests
- Follow AAA pattern: Arrange, Act, Assert
"""
