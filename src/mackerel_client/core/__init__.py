"""Núcleo del cliente.

Por qué:
- Aquí viven el dominio, los contratos (Protocol), la configuración y los
  errores. El núcleo no hace I/O; solo reutiliza `httpx.URL` y
  `httpx.Headers` como tipos de valor en los monitores externos.
"""
