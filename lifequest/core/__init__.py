"""
Core infrastructure layer for LifeQuest.

- Configuration (`lifequest.core.config`)
- Structured logging (`lifequest.core.logging`)
- Infrastructure exceptions (`lifequest.core.exceptions`)
- Service wiring (`lifequest.core.services`)

Import from the submodules directly; this package re-exports nothing so
that importing one subsystem does not pull in the others.
"""
