"""Dominio del cliente (Pydantic v2).

Por qué Pydantic en el dominio:
- Modelos inmutables con validación y documentación autocontenida (Field).
- Las uniones etiquetadas (`type`) se expresan con `Literal` y discriminador.

Nota:
- Estos modelos describen *qué* devuelve/acepta la API en términos Python
  (snake_case, `datetime`, `None`), no *cómo* viaja por la red. El formato
  wire vive en `mackerel_client.adapters.resources`.
"""
