"""Servicios - Adaptadores de colaboradores externos y servicios de sesión."""
