"""Adaptadores de infraestructura (almacenamiento, exportadores)."""
