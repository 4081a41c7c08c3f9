"""Adaptadores de I/O.

Por qué:
- Aquí vive todo lo que toca la red (httpx) y los clientes por recurso que
  traducen entre el formato wire y el dominio.
"""
