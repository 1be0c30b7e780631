"""
Infrastructure adapters (PostgreSQL pool, repositories).

Implementan los puertos de domain.repositories. No contienen reglas de negocio.
"""
