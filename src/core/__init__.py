"""Core del catálogo: dominio, contratos, configuración y servicios."""
