"""Servicios del Core.

Por qué:
- Store, parser, filtros y paginación son lógica pura sobre el dominio.
- `catalog_service` los compone para la capa de presentación.
"""
