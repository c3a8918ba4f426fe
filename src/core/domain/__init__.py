"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2) y los
  enums de operaciones.
- El dominio no conoce HTTP, sockets ni CLI: solo conceptos del problema.
"""
