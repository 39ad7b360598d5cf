"""Memoria - notas personales y perfil de usuario sobre Firestore."""

__version__ = "1.0.0"
